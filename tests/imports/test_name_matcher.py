from __future__ import annotations

from team_scheduler.core.enums import Role
from team_scheduler.imports.matcher import AMBIGUOUS, MATCHED, NO_MATCH, NameMatcher, strip_trailing_note
from team_scheduler.users.model import User


def _user(user_id: int, name: str, sheet_name: str) -> User:
    return User(
        user_id=user_id,
        google_sub=f"sub-{user_id}",
        sheet_name=sheet_name,
        name=name,
        email=f"u{user_id}@example.com",
        role=Role.MEMBER,
    )


USERS = [
    _user(4, "Ota", "Ota\n（Fri）"),
    _user(13, "Isata", "Isata\n（Mitsui）"),
    _user(14, "Gami", "Gami"),
    _user(17, "Kobayashi Ken", "Kobayashi"),
    _user(18, "Kobayashi Aya", "Aya"),
    _user(19, "Tsukii", ""),
]


def _match(label: str):
    return NameMatcher(USERS).match(label)


def test_strip_trailing_note_handles_both_paren_styles():
    assert strip_trailing_note("Ota （Fri）") == "Ota"
    assert strip_trailing_note("Ota (Fri)") == "Ota"
    assert strip_trailing_note("(Ota)") == ""


def test_exact_sheet_name_after_normalization():
    result = _match("Ota\n（Fri）")
    assert result.status == MATCHED
    assert result.user.user_id == 4


def test_exact_name():
    assert _match("Tsukii").user.user_id == 19


def test_label_with_note_stripped():
    assert _match("Gami (remote lead)").user.user_id == 14
    assert _match("Isata （New）").user.user_id == 13


def test_unique_substring_either_direction():
    assert _match("Aya K").user.user_id == 18
    assert _match("Tsuki").user.user_id == 19


def test_ambiguous_substring_is_reported():
    result = _match("Kobaya")

    assert result.status == AMBIGUOUS
    assert result.candidates == (17, 18)
    assert result.user is None


def test_no_match():
    assert _match("Unknown Person").status == NO_MATCH
    assert _match("   ").status == NO_MATCH
