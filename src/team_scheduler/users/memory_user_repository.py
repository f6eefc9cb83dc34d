from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Sequence

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Map-backed repository for local development and tests."""

    def __init__(self, users: Sequence[User] = ()):
        self._users: Dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._users, default=0) + 1

    def list_all(self) -> Sequence[User]:
        return [self._users[k] for k in sorted(self._users)]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_google_sub(self, google_sub: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.google_sub == google_sub), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(
        self,
        *,
        google_sub: str,
        sheet_name: str,
        name: str,
        email: str,
        role: Role,
    ) -> int:
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            user_id=user_id,
            google_sub=google_sub,
            sheet_name=sheet_name,
            name=name,
            email=email,
            role=role,
        )
        return user_id

    def _update(self, user_id: int, **changes) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, **changes)
        return True

    def update_role(self, user_id: int, role: Role) -> bool:
        return self._update(user_id, role=role)

    def update_sheet_name(self, user_id: int, sheet_name: str) -> bool:
        return self._update(user_id, sheet_name=sheet_name)

    def update_google_token(self, user_id: int, token: Optional[str]) -> bool:
        return self._update(user_id, google_access_token=token)

    def delete_by_id(self, user_id: int) -> bool:
        return self._users.pop(int(user_id), None) is not None
