"""Tests for session management."""

from unittest.mock import patch

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

import api.session as session_module
from api.session import (
    SESSION_KEY_CREATED_AT,
    SESSION_KEY_LAST_ACTIVITY,
    SESSION_KEY_TABLE,
    InMemorySessionStore,
    SessionSigner,
    close_session,
    get_session_store,
    open_session,
    read_snapshot,
    set_session_store,
    verify_token,
    write_snapshot,
)


@pytest.fixture(autouse=True)
def reset_store():
    """Each test starts without a cached session store."""
    set_session_store(None)
    yield
    set_session_store(None)


class TestSessionSigner:
    """Tests for SessionSigner."""

    def test_round_trip(self):
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("table-123")
        assert token != "table-123"
        assert signer.unsign(token, max_age=3600) == "table-123"

    def test_tampered_token(self):
        signer = SessionSigner(secret_key="test-secret")
        assert signer.unsign("not-a-token", max_age=3600) is None

    def test_wrong_secret(self):
        token = SessionSigner(secret_key="one").sign("table-123")
        assert SessionSigner(secret_key="two").unsign(token, max_age=3600) is None

    def test_expired_token(self):
        signer = SessionSigner(secret_key="test-secret")
        token = signer.sign("table-123")
        # max_age of -1 treats any token as expired
        assert signer.unsign(token, max_age=-1) is None


class TestInMemorySessionStore:
    """Tests for InMemorySessionStore."""

    @pytest_asyncio.fixture
    async def store(self):
        return InMemorySessionStore()

    @pytest.mark.asyncio
    async def test_set_get_delete(self, store):
        await store.set("s1", {"table": {"round": 3}}, ttl=3600)
        assert await store.get("s1") == {"table": {"round": 3}}
        assert await store.exists("s1")

        await store.delete("s1")
        assert await store.get("s1") is None
        # Deleting twice is harmless
        await store.delete("s1")

    @pytest.mark.asyncio
    async def test_expired_session_is_dropped(self, store):
        await store.set("old", {"table": {}}, ttl=-1)
        assert await store.get("old") is None

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, store):
        await store.set("old-1", {}, ttl=-1)
        await store.set("old-2", {}, ttl=-1)
        await store.set("fresh", {}, ttl=3600)

        assert await store.cleanup_expired() == 2
        assert await store.exists("fresh")

    @pytest.mark.asyncio
    async def test_session_ids(self, store):
        unsigned = store.create_session_id(signed=False)
        assert len(unsigned) == 36
        assert len(store.create_session_id()) > 36


class TestTableSessions:
    """Tests for the table snapshot helpers."""

    @pytest.mark.asyncio
    async def test_session_lifecycle(self):
        set_session_store(InMemorySessionStore())

        token = await open_session({"round": 1})
        assert verify_token(token)
        assert await read_snapshot(token) == {"round": 1}

        await write_snapshot(token, {"round": 2})
        assert await read_snapshot(token) == {"round": 2}

        await close_session(token)
        assert await read_snapshot(token) is None

    @pytest.mark.asyncio
    async def test_session_timestamps(self):
        store = InMemorySessionStore()
        set_session_store(store)

        token = await open_session({"round": 1})
        data = await store.get(token)
        assert data[SESSION_KEY_TABLE] == {"round": 1}
        assert data[SESSION_KEY_LAST_ACTIVITY] >= data[SESSION_KEY_CREATED_AT]

    @pytest.mark.asyncio
    async def test_open_session_drops_expired(self):
        store = InMemorySessionStore()
        await store.set("stale", {}, ttl=-1)
        set_session_store(store)

        await open_session({"round": 1})
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_memory_without_redis(self):
        class DownClient:
            async def ping(self):
                raise RedisConnectionError("connection refused")

        with patch.object(session_module.redis, "from_url", return_value=DownClient()):
            store = await get_session_store()

        assert isinstance(store, InMemorySessionStore)
        assert await get_session_store() is store

    def test_verify_token(self):
        signer = SessionSigner(secret_key="test-secret")
        with patch("api.session.get_session_signer", return_value=signer):
            assert verify_token(signer.sign("table-123"))
            assert not verify_token("garbage")
            assert not verify_token(SessionSigner(secret_key="other").sign("table-123"))
