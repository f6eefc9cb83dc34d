from __future__ import annotations

from datetime import datetime

import pytest

from team_scheduler.core.enums import Role
from team_scheduler.users.memory_user_repository import InMemoryUserRepository
from team_scheduler.users.model import User


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 14, 10, 30, 0)


@pytest.fixture
def admin():
    return User(user_id=1, google_sub="sub-admin", sheet_name="Yamada", name="Taro Yamada", email="yamada@example.com", role=Role.ADMIN)


@pytest.fixture
def member():
    return User(user_id=2, google_sub="sub-sato", sheet_name="Sato\n（Tue）", name="Hanako Sato", email="sato@example.com")


@pytest.fixture
def other_member():
    return User(user_id=3, google_sub="sub-suzuki", sheet_name="Suzuki", name="Ichiro Suzuki", email="suzuki@example.com")


@pytest.fixture
def users_repo(admin, member, other_member):
    return InMemoryUserRepository([admin, member, other_member])
