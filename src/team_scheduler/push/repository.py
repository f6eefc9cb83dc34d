from __future__ import annotations

from typing import Optional, Protocol

from .model import PushSubscription


class PushSubscriptionRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[PushSubscription]:
        raise NotImplementedError

    def save(self, subscription: PushSubscription) -> None:
        """Insert or replace the user's subscription."""
        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> bool:
        raise NotImplementedError
