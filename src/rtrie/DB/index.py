from __future__ import annotations
import json
import logging
from typing import Any, List, Optional

from .api import TrieStore
from ..errors import InvalidArgument, StoreError
from ..normalize import index_keys, normalize_only
from .. import config as CFG

log = logging.getLogger(__name__)


def _absent(v: Any) -> bool:
    return v is None or v == ""


class PrefixIndex:
    """
    Prefix autocomplete index over a TrieStore.

    Layout in the store:
      * one sorted set per prefix, <trie_key><prefix>, member=id, score=priority
      * one hash, <metadata_key>, field=id, value=json(value)

    A term is indexed under every prefix of every word, so a search is a
    single ranked range read on one key plus one batched hash read.
    """

    def __init__(
        self,
        store: Optional[TrieStore] = None,
        *,
        trie_key: Optional[str] = None,
        metadata_key: Optional[str] = None,
        client: Any = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        password: Optional[str] = None,
    ) -> None:
        if store is None:
            from .redis_store import RedisStore
            store = RedisStore(client, host=host, port=port, password=password)
        self.store = store
        self.trie_key = trie_key or CFG.TRIE_KEY
        self.metadata_key = metadata_key or CFG.METADATA_KEY

    # ---- Write ----
    async def add(
        self, key: Optional[str] = None, value: Any = None, item_id: Any = None, priority: float = 0,
    ) -> List[str]:
        """
        Index `value` under every prefix of `key` with rank `priority`.
        Re-adding the same (key, id) overwrites the priority and the value.
        Returns the prefixes written.
        """
        if key is None or value is None or item_id is None:
            raise InvalidArgument("`key` and `value` and `id` must be given!")
        priority = priority or 0
        member = str(item_id)

        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"value for id {member!r} is not JSON serializable: {exc}") from exc

        parts = index_keys(key)
        batch = self.store.batch()
        for part in parts:
            batch.zadd(self.trie_key + part, priority, member)
        batch.hset(self.metadata_key, member, payload)
        await batch.execute()

        log.debug("add id=%s key=%r prefixes=%d priority=%s", member, key, len(parts), priority)
        return parts

    async def delete(self, key: Optional[str] = None, item_id: Any = None) -> List[str]:
        """
        Remove `id` from every prefix set of `key` and drop its metadata.

        The metadata record goes away even if the id is still indexed under
        other terms; callers that index one id under several keys must
        delete each of them.
        """
        if _absent(key) or _absent(item_id):
            raise InvalidArgument("`key` and `id` must be given!")
        member = str(item_id)

        parts = index_keys(key)
        batch = self.store.batch()
        for part in parts:
            batch.zrem(self.trie_key + part, member)
        batch.hdel(self.metadata_key, member)
        await batch.execute()

        log.debug("del id=%s key=%r prefixes=%d", member, key, len(parts))
        return parts

    # ---- Query ----
    async def search(self, key: Optional[str] = None, limit: Optional[int] = None) -> List[Any]:
        """
        Return up to `limit` metadata values for the prefix `key`, highest
        priority first. Ids whose metadata is gone come back as None.
        """
        if _absent(key):
            raise InvalidArgument("`key` must be given!")
        limit = limit or CFG.SEARCH_LIMIT
        if limit < 0:
            raise InvalidArgument(f"`limit` must be positive, got {limit}")

        index_key = self.trie_key + normalize_only(key)
        ids = await self.store.zrevrange(index_key, 0, limit - 1)
        if not ids:
            return []

        rows = await self.store.hmget(self.metadata_key, ids)
        return [self._decode(i, raw) for i, raw in zip(ids, rows)]

    @staticmethod
    def _decode(item_id: str, raw: Optional[str]) -> Any:
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise StoreError(f"metadata for id {item_id!r} is not valid JSON") from exc
