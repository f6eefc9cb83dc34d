from __future__ import annotations

from typing import Dict, Optional

from .model import PushSubscription
from .repository import PushSubscriptionRepository


class InMemoryPushSubscriptionRepository(PushSubscriptionRepository):
    def __init__(self):
        self._subscriptions: Dict[int, PushSubscription] = {}

    def get_for_user(self, user_id: int) -> Optional[PushSubscription]:
        return self._subscriptions.get(int(user_id))

    def save(self, subscription: PushSubscription) -> None:
        self._subscriptions[subscription.user_id] = subscription

    def delete_for_user(self, user_id: int) -> bool:
        return self._subscriptions.pop(int(user_id), None) is not None
