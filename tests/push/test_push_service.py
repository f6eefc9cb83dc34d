from __future__ import annotations

import pytest

from team_scheduler.core.exceptions import IntegrationError, NotFoundError, ValidationError
from team_scheduler.push.memory_push_repository import InMemoryPushSubscriptionRepository
from team_scheduler.push.sender import SubscriptionGoneError
from team_scheduler.push.service import PushService

SUBSCRIPTION = {
    "endpoint": "https://fcm.googleapis.com/fcm/send/abc",
    "keys": {"p256dh": "BKey", "auth": "secret"},
}


class FakeSender:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def send(self, subscription, payload):
        if self.error:
            raise self.error
        self.sent.append((subscription.user_id, payload))


@pytest.fixture
def repo():
    return InMemoryPushSubscriptionRepository()


def test_subscribe_then_send(repo):
    sender = FakeSender()
    service = PushService(repo, sender, vapid_public_key="pub")

    service.subscribe(user_id=2, subscription=SUBSCRIPTION)
    service.send(user_id=2, title="Hello", body="World")

    assert sender.sent == [(2, {"title": "Hello", "body": "World", "data": {}})]


@pytest.mark.parametrize(
    "subscription",
    [
        "not-an-object",
        {"endpoint": "http://insecure.example.com", "keys": {"p256dh": "a", "auth": "b"}},
        {"endpoint": "https://push.example.com"},
        {"endpoint": "https://push.example.com", "keys": {"p256dh": "a"}},
    ],
)
def test_subscribe_rejects_invalid_payloads(repo, subscription):
    service = PushService(repo, FakeSender())

    with pytest.raises(ValidationError):
        service.subscribe(user_id=2, subscription=subscription)


def test_resubscribe_replaces_previous(repo):
    service = PushService(repo, FakeSender())
    service.subscribe(user_id=2, subscription=SUBSCRIPTION)
    service.subscribe(user_id=2, subscription=dict(SUBSCRIPTION, endpoint="https://push.example.com/new"))

    assert repo.get_for_user(2).endpoint == "https://push.example.com/new"


def test_send_without_subscription(repo):
    with pytest.raises(NotFoundError):
        PushService(repo, FakeSender()).send(user_id=9, title="t", body="b")


def test_unsubscribe(repo):
    service = PushService(repo, FakeSender())
    service.subscribe(user_id=2, subscription=SUBSCRIPTION)

    service.unsubscribe(user_id=2)

    assert repo.get_for_user(2) is None
    with pytest.raises(NotFoundError):
        service.unsubscribe(user_id=2)


def test_gone_subscription_is_removed(repo):
    service = PushService(repo, FakeSender(error=SubscriptionGoneError("410")))
    service.subscribe(user_id=2, subscription=SUBSCRIPTION)

    with pytest.raises(SubscriptionGoneError):
        service.send(user_id=2, title="t", body="b")
    assert repo.get_for_user(2) is None


def test_other_delivery_errors_keep_subscription(repo):
    service = PushService(repo, FakeSender(error=IntegrationError("boom")))
    service.subscribe(user_id=2, subscription=SUBSCRIPTION)

    with pytest.raises(IntegrationError):
        service.send(user_id=2, title="t", body="b")
    assert repo.get_for_user(2) is not None


def test_notify_admin_links_to_pending_tab(repo):
    sender = FakeSender()
    service = PushService(repo, sender)
    service.subscribe(user_id=1, subscription=SUBSCRIPTION)

    service.notify_admin(admin_id=1, user_name="New Person", user_email="new@example.com")

    (user_id, payload), = sender.sent
    assert user_id == 1
    assert payload["data"] == {"url": "/admin?tab=pending", "type": "pending_user"}
    assert "new@example.com" in payload["body"]


def test_vapid_public_key_must_be_configured(repo):
    assert PushService(repo, FakeSender(), vapid_public_key="pub").vapid_public_key() == "pub"
    with pytest.raises(IntegrationError):
        PushService(repo, FakeSender()).vapid_public_key()
