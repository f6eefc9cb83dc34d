from __future__ import annotations

from ..core.exceptions import AuthorizationError


def require_admin(actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Admin permission required")


def require_owner_or_admin(actor, owner_id: int) -> None:
    if actor.is_admin or int(actor.user_id) == int(owner_id):
        return
    raise AuthorizationError("You do not have permission to modify this item")
