from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, google_sub, sheet_name, name, email, role, google_access_token"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        google_sub=row["google_sub"],
        sheet_name=row.get("sheet_name") or "",
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        google_access_token=row.get("google_access_token"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id ASC")
            return [_row_to_user(r) for r in fetchall(cur)]

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_google_sub(self, google_sub: str) -> Optional[User]:
        return self._get_one("google_sub", google_sub)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def create_user(
        self,
        *,
        google_sub: str,
        sheet_name: str,
        name: str,
        email: str,
        role: Role,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(google_sub, sheet_name, name, email, role)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (google_sub, sheet_name, name, email, role.value),
            )
            return int(cur.lastrowid)

    def _update_column(self, user_id: int, column: str, value) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {column}=%s, updated_at=CURRENT_TIMESTAMP WHERE user_id=%s",
                (value, int(user_id)),
            )
            return cur.rowcount > 0

    def update_role(self, user_id: int, role: Role) -> bool:
        return self._update_column(user_id, "role", role.value)

    def update_sheet_name(self, user_id: int, sheet_name: str) -> bool:
        return self._update_column(user_id, "sheet_name", sheet_name)

    def update_google_token(self, user_id: int, token: Optional[str]) -> bool:
        return self._update_column(user_id, "google_access_token", token)

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
