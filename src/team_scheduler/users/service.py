from __future__ import annotations

from typing import Callable, List, Optional

from ..common.datetime_utils import now_local
from ..common.permissions import require_admin
from ..common.validators import matches_search, optional_text, require_email, require_non_empty
from ..core.constants import PRE_REGISTERED_SUB_PREFIX
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..logging_config import get_logger
from .model import User
from .repository import UserRepository

logger = get_logger(__name__)


class UserService:
    """Use case: look up and manage team members."""

    def __init__(self, users: UserRepository, *, clock: Callable = now_local):
        self._users = users
        self._clock = clock

    def list_users(self, *, search: Optional[str] = None) -> List[User]:
        return [u for u in self._users.list_all() if matches_search(search, u.name, u.email, u.sheet_name)]

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_by_google_sub(self, google_sub: str) -> User:
        user = self._users.get_by_google_sub(google_sub)
        if not user:
            raise NotFoundError("User not found")
        return user

    def pre_register(
        self,
        *,
        actor: User,
        name: str,
        email: str,
        sheet_name: str,
        role: Role = Role.MEMBER,
    ) -> User:
        """Create an account ahead of the member's first sign-in.

        The placeholder subject is replaced by the auth layer once the member
        signs in with the same email.
        """
        require_admin(actor)
        name = require_non_empty(name, "Name")
        email = require_email(email)
        sheet_name = require_non_empty(sheet_name, "Sheet name")

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        epoch_ms = int(self._clock().timestamp() * 1000)
        user_id = self._users.create_user(
            google_sub=f"{PRE_REGISTERED_SUB_PREFIX}{epoch_ms}",
            sheet_name=sheet_name,
            name=name,
            email=email,
            role=role,
        )
        logger.info("User pre-registered", user_id=user_id, by=actor.user_id)
        return self.get_user(user_id)

    def set_role(self, *, actor: User, user_id: int, role: Role) -> User:
        require_admin(actor)
        self.get_user(user_id)
        self._users.update_role(user_id, role)
        logger.info("User role changed", user_id=user_id, role=role.value, by=actor.user_id)
        return self.get_user(user_id)

    def update_sheet_name(self, *, actor: User, user_id: int, sheet_name: str) -> User:
        require_admin(actor)
        self.get_user(user_id)
        self._users.update_sheet_name(user_id, require_non_empty(sheet_name, "Sheet name"))
        return self.get_user(user_id)

    def set_google_token(self, *, actor: User, user_id: int, token: Optional[str]) -> User:
        if actor.user_id != user_id and not actor.is_admin:
            raise AuthorizationError("Cannot change another user's token")
        self.get_user(user_id)
        self._users.update_google_token(user_id, optional_text(token))
        return self.get_user(user_id)

    def delete_user(self, *, actor: User, user_id: int) -> None:
        require_admin(actor)
        if actor.user_id == user_id:
            raise ValidationError("You cannot delete your own account")
        self.get_user(user_id)
        if not self._users.delete_by_id(user_id):
            raise ValidationError("Failed to delete user")
        logger.info("User deleted", user_id=user_id, by=actor.user_id)
