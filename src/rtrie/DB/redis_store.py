# rtrie/DB/redis_store.py
from __future__ import annotations
import logging
from typing import Any, Iterable, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .api import TrieBatch, TrieStore
from ..errors import StoreError
from .. import config as CFG

log = logging.getLogger(__name__)


class RedisBatch(TrieBatch):
    """MULTI/EXEC pipeline: commands are buffered and sent together on execute()."""
    def __init__(self, client: redis.Redis) -> None:
        self._pipe = client.pipeline(transaction=True)

    def zadd(self, key: str, score: float, member: str) -> None:
        self._pipe.zadd(key, {member: score})

    def zrem(self, key: str, member: str) -> None:
        self._pipe.zrem(key, member)

    def hset(self, key: str, field: str, value: str) -> None:
        self._pipe.hset(key, field, value)

    def hdel(self, key: str, field: str) -> None:
        self._pipe.hdel(key, field)

    async def execute(self) -> List[Any]:
        try:
            return await self._pipe.execute()
        except RedisError as exc:
            raise StoreError(f"batch failed: {exc}") from exc


class RedisStore(TrieStore):
    """
    TrieStore over a redis-py asyncio client.

    Either pass a ready client (`client=`) or connection parameters; the
    client is created with decode_responses=True so members and hash values
    come back as str.
    """
    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        *,
        host: Optional[str] = None,
        port: Optional[int] = None,
        password: Optional[str] = None,
        db: int = 0,
        **kwargs: Any,
    ) -> None:
        if client is None:
            client = redis.Redis(
                host=host or CFG.REDIS_HOST,
                port=port or CFG.REDIS_PORT,
                password=password if password is not None else CFG.REDIS_PASSWORD,
                db=db,
                decode_responses=True,
                **kwargs,
            )
        self.redis = client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisStore":
        kwargs.setdefault("decode_responses", True)
        return cls(redis.from_url(url, **kwargs))

    # W
    def batch(self) -> RedisBatch:
        return RedisBatch(self.redis)

    # R
    async def zrevrange(self, key: str, start: int, stop: int) -> List[str]:
        try:
            return list(await self.redis.zrevrange(key, start, stop))
        except RedisError as exc:
            raise StoreError(f"ZREVRANGE {key} failed: {exc}") from exc

    async def hmget(self, key: str, fields: Iterable[str]) -> List[Optional[str]]:
        try:
            return list(await self.redis.hmget(key, list(fields)))
        except RedisError as exc:
            raise StoreError(f"HMGET {key} failed: {exc}") from exc

    async def close(self) -> None:
        await self.redis.aclose()
        log.info("Redis connection closed")
