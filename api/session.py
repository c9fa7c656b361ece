"""Signed table sessions stored in Redis, or in memory when Redis is down."""

import json
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from redis.exceptions import RedisError

from config import config

logger = logging.getLogger(__name__)

# Session data keys
SESSION_KEY_TABLE = "table"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


class SessionSigner:
    """Sign and verify session tokens using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify a signed token.

        Args:
            token: Token previously returned by :meth:`sign`
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID, or None if the token is forged or expired
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Key-value store of session data, with per-key expiry."""

    @abstractmethod
    async def get(self, session_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        ...

    async def exists(self, session_id: str) -> bool:
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Drop expired sessions; stores with native expiry have nothing to do."""
        return 0

    def create_session_id(self, signed: bool = True) -> str:
        """Create a new session ID, signed by default."""
        session_id = str(uuid4())
        if signed:
            return get_session_signer().sign(session_id)
        return session_id


class InMemorySessionStore(SessionStore):
    """Process-local store for development and tests."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        data, expiry = entry
        if expiry < datetime.now():
            await self.delete(session_id)
            return None
        return data

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        ttl = ttl or config.session_ttl
        self._sessions[session_id] = (data, datetime.now() + timedelta(seconds=ttl))

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore(SessionStore):
    """Redis-backed store; keys expire through SETEX."""

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client
        self._prefix = "blackjack_table:session:"

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> dict[str, Any] | None:
        raw = await self._redis.get(self._key(session_id))
        return None if raw is None else json.loads(raw)

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        await self._redis.setex(self._key(session_id), ttl or config.session_ttl, json.dumps(data))

    async def delete(self, session_id: str) -> None:
        await self._redis.delete(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        return await self._redis.exists(self._key(session_id)) > 0


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get the session store, connecting to Redis on first use."""
    global _session_store

    if _session_store is None:
        try:
            redis_client = redis.from_url(config.redis.url)
            await redis_client.ping()
            _session_store = RedisSessionStore(redis_client)
        except (RedisError, OSError) as exc:
            logger.warning(
                "Redis unavailable at %s (%s), keeping tables in memory", config.redis.url, exc
            )
            _session_store = InMemorySessionStore()
    return _session_store


def set_session_store(store: SessionStore | None) -> None:
    """Replace the session store (None resets to lazy detection)."""
    global _session_store
    _session_store = store


def verify_token(token: str) -> bool:
    """Check that a session token was issued by this service and has not expired."""
    return get_session_signer().unsign(token) is not None


async def open_session(snapshot: dict[str, Any]) -> str:
    """Start a session holding a table snapshot and return its signed token."""
    store = await get_session_store()
    dropped = await store.cleanup_expired()
    if dropped:
        logger.info("Dropped %d expired table sessions", dropped)

    token = store.create_session_id()
    now = int(time.time())
    await store.set(
        token,
        {
            SESSION_KEY_TABLE: snapshot,
            SESSION_KEY_CREATED_AT: now,
            SESSION_KEY_LAST_ACTIVITY: now,
        },
    )
    return token


async def read_snapshot(token: str) -> dict[str, Any] | None:
    """Return the table snapshot held by a session, if any."""
    store = await get_session_store()
    data = await store.get(token)
    if not data:
        return None
    return data.get(SESSION_KEY_TABLE)


async def write_snapshot(token: str, snapshot: dict[str, Any]) -> None:
    """Store a table snapshot in a session, refreshing its expiry."""
    store = await get_session_store()
    data = await store.get(token) or {SESSION_KEY_CREATED_AT: int(time.time())}
    data[SESSION_KEY_TABLE] = snapshot
    data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    await store.set(token, data)


async def close_session(token: str) -> None:
    store = await get_session_store()
    await store.delete(token)
