from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlparse

from ..core.constants import PENDING_APPROVAL_URL
from ..core.exceptions import IntegrationError, NotFoundError, ValidationError
from ..logging_config import get_logger
from .model import PushSubscription
from .repository import PushSubscriptionRepository
from .sender import PushSender, SubscriptionGoneError

logger = get_logger(__name__)


class PushService:
    def __init__(
        self,
        subscriptions: PushSubscriptionRepository,
        sender: PushSender,
        *,
        vapid_public_key: Optional[str] = None,
    ):
        self._subscriptions = subscriptions
        self._sender = sender
        self._vapid_public_key = vapid_public_key

    def vapid_public_key(self) -> str:
        if not self._vapid_public_key:
            raise IntegrationError("VAPID public key is not configured")
        return self._vapid_public_key

    def subscribe(self, *, user_id: int, subscription: Any) -> PushSubscription:
        if not isinstance(subscription, dict):
            raise ValidationError("Subscription must be an object")

        endpoint = str(subscription.get("endpoint") or "").strip()
        parsed = urlparse(endpoint)
        if parsed.scheme != "https" or not parsed.netloc:
            raise ValidationError("Subscription endpoint must be an https URL")

        keys = subscription.get("keys")
        if not isinstance(keys, dict) or not keys.get("p256dh") or not keys.get("auth"):
            raise ValidationError("Subscription keys (p256dh, auth) are required")

        sub = PushSubscription(
            user_id=int(user_id),
            endpoint=endpoint,
            p256dh=str(keys["p256dh"]),
            auth=str(keys["auth"]),
        )
        self._subscriptions.save(sub)
        logger.info("Push subscription saved", user_id=user_id)
        return sub

    def unsubscribe(self, *, user_id: int) -> None:
        if not self._subscriptions.delete_for_user(user_id):
            raise NotFoundError("No push subscription for this user")

    def send(self, *, user_id: int, title: str, body: str, data: Optional[dict] = None) -> None:
        sub = self._subscriptions.get_for_user(user_id)
        if not sub:
            raise NotFoundError("No push subscription for this user")

        payload = {"title": title, "body": body, "data": data or {}}
        try:
            self._sender.send(sub, payload)
        except SubscriptionGoneError:
            self._subscriptions.delete_for_user(user_id)
            logger.warning("Expired push subscription removed", user_id=user_id)
            raise
        logger.info("Push notification sent", user_id=user_id, title=title)

    def notify_admin(self, *, admin_id: int, user_name: str, user_email: str) -> None:
        self.send(
            user_id=admin_id,
            title="New user awaiting approval",
            body=f"{user_name} ({user_email}) is waiting for approval.",
            data={"url": PENDING_APPROVAL_URL, "type": "pending_user"},
        )
