"""Tests for the in-memory session store."""

import pytest

from archigen.utils.errors import SessionNotFound
from archigen.utils.session_store import SessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(factory=lambda session_id: {"id": session_id}, ttl_seconds=60, clock=clock)


def test_create_and_get(store):
    session = store.create()
    assert store.get(session["id"]) is session
    assert len(store) == 1


def test_sessions_are_independent(store):
    a, b = store.create(), store.create()
    assert a["id"] != b["id"]
    assert store.get(a["id"]) is a and store.get(b["id"]) is b


def test_unknown_session(store):
    with pytest.raises(SessionNotFound):
        store.get("nope")


def test_idle_sessions_expire(store, clock):
    session = store.create()
    clock.now += 61

    with pytest.raises(SessionNotFound):
        store.get(session["id"])
    assert len(store) == 0


def test_access_refreshes_ttl(store, clock):
    session = store.create()
    clock.now += 50
    store.get(session["id"])
    clock.now += 50

    assert store.get(session["id"]) is session


def test_cleanup_expired(store, clock):
    store.create()
    store.create()
    clock.now += 120
    fresh = store.create()

    assert len(store) == 1
    assert store.cleanup_expired() == 0
    assert store.get(fresh["id"]) is fresh


def test_delete(store):
    session = store.create()
    store.delete(session["id"])
    store.delete(session["id"])

    with pytest.raises(SessionNotFound):
        store.get(session["id"])
