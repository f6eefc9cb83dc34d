from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..users.model import User
from .parser import normalize_label

MATCHED = "matched"
NO_MATCH = "no_match"
AMBIGUOUS = "ambiguous"

_TRAILING_NOTE = re.compile(r"\s*[（(][^（）()]*[）)]\s*$")


@dataclass(frozen=True)
class MatchResult:
    label: str
    status: str
    user: Optional[User] = None
    candidates: tuple = ()

    @property
    def matched(self) -> bool:
        return self.status == MATCHED


def strip_trailing_note(label: str) -> str:
    """'太田 （金）' -> '太田'."""
    return _TRAILING_NOTE.sub("", label).strip()


class NameMatcher:
    """Map spreadsheet labels to users.

    Rules, first hit wins:
    1. normalized sheet_name == label
    2. name == label
    3. label without its trailing (note) == name or stripped sheet_name
    4. a single user whose sheet_name or name contains, or is contained in, the label
    """

    def __init__(self, users: Sequence[User]):
        self._users = list(users)

    def _unique(self, label: str, hits: List[User]) -> Optional[MatchResult]:
        unique = {u.user_id: u for u in hits}
        if len(unique) == 1:
            return MatchResult(label=label, status=MATCHED, user=next(iter(unique.values())))
        if len(unique) > 1:
            return MatchResult(label=label, status=AMBIGUOUS, candidates=tuple(sorted(unique)))
        return None

    def _first_rule(self, label: str, rules: Sequence[Callable[[User], bool]]) -> Optional[MatchResult]:
        for rule in rules:
            result = self._unique(label, [u for u in self._users if rule(u)])
            if result:
                return result
        return None

    def match(self, raw_label: str) -> MatchResult:
        label = normalize_label(raw_label)
        if not label:
            return MatchResult(label=label, status=NO_MATCH)
        base = strip_trailing_note(label)

        def sheet(u: User) -> str:
            return normalize_label(u.sheet_name)

        def name(u: User) -> str:
            return normalize_label(u.name)

        def contains_either_way(value: str) -> bool:
            return bool(value) and (base in value or value in base)

        result = self._first_rule(
            label,
            [
                lambda u: sheet(u) == label,
                lambda u: name(u) == label,
                lambda u: bool(base) and (name(u) == base or strip_trailing_note(sheet(u)) == base),
                lambda u: bool(base) and (contains_either_way(sheet(u)) or contains_either_way(name(u))),
            ],
        )
        return result or MatchResult(label=label, status=NO_MATCH)
