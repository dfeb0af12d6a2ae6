"""
Session store lifecycle and expiry
"""

from datetime import datetime, timedelta, timezone

import pytest

from storerate.utils.session_manager import SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(ttl=timedelta(hours=24), clock=clock)


def test_create_and_resolve(store):
    session = store.create("user-1")
    assert session.user_id == "user-1"
    assert session.expires_at - session.created_at == timedelta(hours=24)
    assert store.resolve(session.token) == "user-1"


def test_tokens_are_unique(store):
    tokens = {store.create("user-1").token for _ in range(20)}
    assert len(tokens) == 20


def test_unknown_and_missing_tokens(store):
    assert store.resolve("nope") is None
    assert store.resolve(None) is None
    assert store.resolve("") is None


def test_expires_after_ttl_from_creation(store, clock):
    session = store.create("user-1")
    clock.advance(hours=23, minutes=59)
    assert store.resolve(session.token) == "user-1"
    clock.advance(minutes=1)
    assert store.resolve(session.token) is None
    # Expired sessions are evicted on access
    assert store.count() == 0


def test_activity_does_not_extend_session(store, clock):
    session = store.create("user-1")
    for _ in range(23):
        clock.advance(hours=1)
        assert store.resolve(session.token) == "user-1"
    clock.advance(hours=1)
    assert store.resolve(session.token) is None


def test_destroy(store):
    session = store.create("user-1")
    assert store.destroy(session.token) is True
    assert store.resolve(session.token) is None
    assert store.destroy(session.token) is False


def test_destroy_user_keeps_current_session(store):
    current = store.create("user-1")
    other = store.create("user-1")
    unrelated = store.create("user-2")

    assert store.destroy_user("user-1", keep=current.token) == 1
    assert store.resolve(current.token) == "user-1"
    assert store.resolve(other.token) is None
    assert store.resolve(unrelated.token) == "user-2"


def test_purge_expired(store, clock):
    store.create("user-1")
    clock.advance(hours=12)
    fresh = store.create("user-2")
    clock.advance(hours=13)

    assert store.purge_expired() == 1
    assert store.count() == 1
    assert store.resolve(fresh.token) == "user-2"


def test_create_drops_abandoned_sessions(store, clock):
    for i in range(1000):
        store.create(f"user-{i}")
    clock.advance(days=2)

    latest = store.create("user-new")

    assert store.count() == 1
    assert store.resolve(latest.token) == "user-new"


def test_create_keeps_live_sessions(store, clock):
    live = store.create("user-1")
    clock.advance(hours=1)
    store.create("user-2")

    assert store.count() == 2
    assert store.resolve(live.token) == "user-1"


def test_default_clock_is_naive_utc():
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    session = SessionStore().create("user-1")
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    assert session.created_at.tzinfo is None
    assert before <= session.created_at <= after
