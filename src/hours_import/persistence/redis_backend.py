"""Redis session backend implementing ISessionStore."""

from __future__ import annotations

import redis
from pydantic import ValidationError

from hours_import.core.exceptions import SessionStoreError
from hours_import.models.preview import SessionRecord


class RedisSessionStore:
    """Multi-process ISessionStore; expiry is left to Redis key TTLs."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 ttl_seconds: int = 1800, key_prefix: str = "hours-import:session:") -> None:
        self._host = host
        self._port = port
        self._db = db
        self._ttl = ttl_seconds
        self._prefix = key_prefix
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    def put(self, session_id: str, record: SessionRecord) -> None:
        try:
            self._client.setex(self._key(session_id), self._ttl, record.model_dump_json())
        except Exception as exc:
            raise SessionStoreError(f"Redis SETEX failed for session={session_id!r}: {exc}") from exc

    def get(self, session_id: str) -> SessionRecord | None:
        try:
            raw = self._client.get(self._key(session_id))
        except Exception as exc:
            raise SessionStoreError(f"Redis GET failed for session={session_id!r}: {exc}") from exc
        if raw is None:
            return None
        try:
            return SessionRecord.model_validate_json(raw)
        except ValidationError as exc:
            raise SessionStoreError(f"Corrupt session record {session_id!r}: {exc}") from exc

    def delete(self, session_id: str) -> None:
        try:
            self._client.delete(self._key(session_id))
        except Exception as exc:
            raise SessionStoreError(f"Redis DELETE failed for session={session_id!r}: {exc}") from exc

    def reclaim_expired(self) -> int:
        # Redis drops expired keys itself
        return 0
