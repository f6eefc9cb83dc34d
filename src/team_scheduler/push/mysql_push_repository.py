from __future__ import annotations

import json
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_column
from .model import PushSubscription
from .repository import PushSubscriptionRepository


class MySQLPushSubscriptionRepository(PushSubscriptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: int) -> Optional[PushSubscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, subscription FROM push_subscriptions WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            if not r:
                return None
            info = load_json_column(r["subscription"]) or {}
            keys = info.get("keys") or {}
            return PushSubscription(
                user_id=int(r["user_id"]),
                endpoint=info.get("endpoint", ""),
                p256dh=keys.get("p256dh", ""),
                auth=keys.get("auth", ""),
            )

    def save(self, subscription: PushSubscription) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO push_subscriptions(user_id, subscription)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE subscription=VALUES(subscription), updated_at=CURRENT_TIMESTAMP
                """,
                (subscription.user_id, json.dumps(subscription.subscription_info())),
            )

    def delete_for_user(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM push_subscriptions WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
