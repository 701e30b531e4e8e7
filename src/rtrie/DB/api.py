# rtrie/DB/api.py
from __future__ import annotations
from typing import Any, Iterable, List, Optional, Protocol


class TrieBatch(Protocol):
    """Buffered writes, applied as one indivisible unit by execute()."""
    def zadd(self, key: str, score: float, member: str) -> None: ...
    def zrem(self, key: str, member: str) -> None: ...
    def hset(self, key: str, field: str, value: str) -> None: ...
    def hdel(self, key: str, field: str) -> None: ...
    async def execute(self) -> List[Any]: ...


class TrieStore(Protocol):
    # Write
    def batch(self) -> TrieBatch: ...
    # Read
    async def zrevrange(self, key: str, start: int, stop: int) -> List[str]: ...
    async def hmget(self, key: str, fields: Iterable[str]) -> List[Optional[str]]: ...
    # lifecycle
    async def close(self) -> None: ...


def make_store(dsn: str, **kwargs: Any) -> TrieStore:
    """
    Factory:
      - redis://host:port/db, rediss://..., unix://... -> RedisStore
      - memory://                                    -> MemoryStore
    Extra keyword arguments are passed to the Redis client.
    """
    if dsn.startswith(("redis://", "rediss://", "unix://")):
        from .redis_store import RedisStore
        return RedisStore.from_url(dsn, **kwargs)

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
