from __future__ import annotations

import json
from typing import Optional, Protocol

from pywebpush import WebPushException, webpush

from ..core.exceptions import IntegrationError
from .model import PushSubscription


class SubscriptionGoneError(IntegrationError):
    """The push service reports the subscription as expired (404/410)."""


class PushSender(Protocol):
    def send(self, subscription: PushSubscription, payload: dict) -> None:
        raise NotImplementedError


class WebPushSender(PushSender):
    def __init__(self, *, vapid_private_key: Optional[str], vapid_claim_email: Optional[str]):
        self._private_key = vapid_private_key
        self._claim_email = vapid_claim_email

    def send(self, subscription: PushSubscription, payload: dict) -> None:
        if not self._private_key or not self._claim_email:
            raise IntegrationError("VAPID keys are not configured")

        try:
            webpush(
                subscription_info=subscription.subscription_info(),
                data=json.dumps(payload, ensure_ascii=False),
                vapid_private_key=self._private_key,
                vapid_claims={"sub": f"mailto:{self._claim_email}"},
            )
        except WebPushException as e:
            status = getattr(e.response, "status_code", None)
            if status in (404, 410):
                raise SubscriptionGoneError(f"Push subscription expired ({status})")
            raise IntegrationError(f"Push delivery failed: {e}")
