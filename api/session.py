"""Session record stores: Redis backend with in-memory fallback."""

import copy
import json
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from config import config
from core.errors import StorageError
from core.game.record import RecordStore, SessionRecord

logger = logging.getLogger(__name__)


class InMemorySessionStore(RecordStore):
    """In-memory record store for local development and tests."""

    def __init__(self) -> None:
        self._records: dict[int, SessionRecord] = {}

    async def get(self, player_id: int) -> SessionRecord | None:
        """Get the record for a player."""
        record = self._records.get(player_id)
        return copy.deepcopy(record) if record is not None else None

    async def upsert(self, record: SessionRecord) -> SessionRecord:
        """Insert or replace a player's record."""
        self._records[record.player_id] = copy.deepcopy(record)
        return record

    async def delete(self, player_id: int) -> None:
        """Delete a player's record."""
        self._records.pop(player_id, None)

    async def count_in_progress(self) -> int:
        """Count records without an outcome."""
        return sum(1 for record in self._records.values() if record.in_progress)

    def __len__(self) -> int:
        return len(self._records)


class RedisSessionStore(RecordStore):
    """Redis-backed record store, one JSON document per player."""

    def __init__(self, redis_client: "redis.Redis", prefix: str | None = None) -> None:
        self._redis = redis_client
        self._prefix = prefix or config.storage.key_prefix

    def _key(self, player_id: int) -> str:
        """Get Redis key for a player."""
        return f"{self._prefix}{player_id}"

    @staticmethod
    def _decode(key: str, data: str) -> SessionRecord:
        """Parse a stored JSON document, raising StorageError if it is malformed."""
        try:
            return SessionRecord.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Malformed session document at {key}: {e!r}") from e

    async def get(self, player_id: int) -> SessionRecord | None:
        """Get the record for a player."""
        key = self._key(player_id)
        try:
            data = await self._redis.get(key)
        except RedisError as e:
            raise StorageError(f"Failed to load session for player {player_id}: {e}") from e
        if data is None:
            return None
        return self._decode(key, data)

    async def upsert(self, record: SessionRecord) -> SessionRecord:
        """Insert or replace a player's record."""
        try:
            await self._redis.set(self._key(record.player_id), json.dumps(record.to_dict()))
        except RedisError as e:
            raise StorageError(
                f"Failed to save session for player {record.player_id}: {e}"
            ) from e
        return record

    async def delete(self, player_id: int) -> None:
        """Delete a player's record."""
        try:
            await self._redis.delete(self._key(player_id))
        except RedisError as e:
            raise StorageError(f"Failed to delete session for player {player_id}: {e}") from e

    async def count_in_progress(self) -> int:
        """Count records without an outcome."""
        count = 0
        try:
            async for key in self._redis.scan_iter(match=f"{self._prefix}*"):
                data = await self._redis.get(key)
                if data is not None and self._decode(key, data).in_progress:
                    count += 1
        except RedisError as e:
            raise StorageError(f"Failed to count active sessions: {e}") from e
        return count


# Global session store instance
_session_store: RecordStore | None = None


async def get_session_store() -> RecordStore:
    """Get or create the record store selected by configuration."""
    global _session_store

    if _session_store is not None:
        return _session_store

    if config.storage.backend == "redis":
        redis_client = redis.from_url(config.redis.url, decode_responses=True)
        try:
            await redis_client.ping()
        except RedisError as e:
            logger.warning(
                "Redis at %s unavailable (%s); falling back to in-memory sessions",
                config.redis.url,
                e,
            )
            await redis_client.aclose()
        else:
            # Another request may have installed a store while this one waited on ping
            if _session_store is not None:
                await redis_client.aclose()
                return _session_store
            logger.info("Using Redis session store at %s", config.redis.url)
            _session_store = RedisSessionStore(redis_client)
            return _session_store

    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


def set_session_store(store: RecordStore | None) -> None:
    """Replace the global record store (None resets it)."""
    global _session_store
    _session_store = store
