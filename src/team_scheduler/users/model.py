from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: team member.

    Note: Plain data object (no DB access code). `google_sub` is the subject
    issued by the external auth provider; `sheet_name` is the row label used
    for this member in the team spreadsheet.
    """

    user_id: int
    google_sub: str
    sheet_name: str
    name: str
    email: str
    role: Role = Role.MEMBER
    google_access_token: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "google_sub": self.google_sub,
            "sheet_name": self.sheet_name,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "has_google_token": bool(self.google_access_token),
        }
