# rtrie/DB/memory_store.py
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional

from .api import TrieBatch, TrieStore


class MemoryBatch(TrieBatch):
    """Queues operations; execute() applies them in one synchronous step."""
    def __init__(self, store: "MemoryStore") -> None:
        self._store = store
        self._ops: List[Callable[[], Any]] = []

    def zadd(self, key: str, score: float, member: str) -> None:
        self._ops.append(lambda: self._store._zadd(key, score, member))

    def zrem(self, key: str, member: str) -> None:
        self._ops.append(lambda: self._store._zrem(key, member))

    def hset(self, key: str, field: str, value: str) -> None:
        self._ops.append(lambda: self._store._hset(key, field, value))

    def hdel(self, key: str, field: str) -> None:
        self._ops.append(lambda: self._store._hdel(key, field))

    async def execute(self) -> List[Any]:
        # no await between ops: other coroutines never see half a batch
        ops, self._ops = self._ops, []
        self._store.batches += 1
        return [op() for op in ops]


class MemoryStore(TrieStore):
    """In-memory sorted sets + hashes with Redis semantics (useful for tests or ephemeral runs)."""
    def __init__(self) -> None:
        self._zsets: Dict[str, Dict[str, float]] = {}
        self._hashes: Dict[str, Dict[str, str]] = {}
        self.batches = 0  # number of executed batches

    # W
    def batch(self) -> MemoryBatch:
        return MemoryBatch(self)

    def _zadd(self, key: str, score: float, member: str) -> int:
        zset = self._zsets.setdefault(key, {})
        added = 0 if member in zset else 1
        zset[member] = float(score)
        return added

    def _zrem(self, key: str, member: str) -> int:
        zset = self._zsets.get(key)
        if zset is None or member not in zset:
            return 0
        del zset[member]
        if not zset:
            del self._zsets[key]
        return 1

    def _hset(self, key: str, field: str, value: str) -> int:
        h = self._hashes.setdefault(key, {})
        added = 0 if field in h else 1
        h[field] = value
        return added

    def _hdel(self, key: str, field: str) -> int:
        h = self._hashes.get(key)
        if h is None or field not in h:
            return 0
        del h[field]
        if not h:
            del self._hashes[key]
        return 1

    # R
    async def zrevrange(self, key: str, start: int, stop: int) -> List[str]:
        zset = self._zsets.get(key, {})
        # ZREVRANGE: descending score, equal scores in descending member order
        ranked = sorted(zset.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
        members = [m for m, _ in ranked]
        if stop < 0:
            stop = len(members) + stop
        return members[start:stop + 1]

    async def hmget(self, key: str, fields: Iterable[str]) -> List[Optional[str]]:
        h = self._hashes.get(key, {})
        return [h.get(f) for f in fields]

    # inspection helpers
    def zscore(self, key: str, member: str) -> Optional[float]:
        return self._zsets.get(key, {}).get(member)

    def hget(self, key: str, field: str) -> Optional[str]:
        return self._hashes.get(key, {}).get(field)

    def keys(self) -> List[str]:
        return sorted([*self._zsets, *self._hashes])

    async def close(self) -> None:
        self._zsets.clear()
        self._hashes.clear()
