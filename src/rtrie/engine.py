# rtrie/engine.py
from __future__ import annotations

import asyncio
import logging
import os
import threading
from typing import Any, Awaitable, Iterable, List, Optional, TypeVar

from . import config as CFG
from .loader import iter_items
from .search import complete_query
from .DB.index import PrefixIndex
from .DB.api import TrieStore, make_store

log = logging.getLogger(__name__)

T = TypeVar("T")


class Engine:
    """
    Thin synchronous layer that glues together:
      - a TrieStore (Redis or in-memory) built from a DSN,
      - the PrefixIndex (add / delete / search),
      - the bulk loader for *.jsonl item files.

    Public API (used by CLI/Flask):
      * build(roots, ...): connect -> ingest items from roots
      * load(...):         connect to an already populated store
      * add / delete:      single item mutations
      * complete(query, top_k): ranked metadata for a prefix
      * shutdown():        close the store and the event loop

    The index is async; the engine runs it on a private event loop in a
    daemon thread so the store client is only ever used from that loop,
    whichever thread calls in.

    Storage DSNs (via rtrie.DB.api.make_store):
      - "redis://localhost:6379/0"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.index: Optional[PrefixIndex] = None
        self._store: Optional[TrieStore] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    # /* ~~~ Connect to a store and wire up the index ~~~ */
    def load(
        self,
        db_dsn: Optional[str] = None,          # e.g., "redis://localhost:6379/0" or "memory://"
        *,
        trie_key: Optional[str] = None,
        metadata_key: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["RTRIE_VERBOSE"] = "1"

        if self.index is not None:
            raise RuntimeError("Engine already initialized. Call shutdown() first.")

        self._start_loop()
        dsn = db_dsn or CFG.DEFAULT_DSN
        log.info("Initializing trie store: %s", dsn)
        self._store = make_store(dsn)
        self.index = PrefixIndex(self._store, trie_key=trie_key, metadata_key=metadata_key)
        log.info("Engine load() complete: trie_key=%r metadata_key=%r",
                 self.index.trie_key, self.index.metadata_key)

    # /* ~~~ Connect, then index every item found under the roots ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        db_dsn: Optional[str] = None,
        trie_key: Optional[str] = None,
        metadata_key: Optional[str] = None,
        verbose: bool = False,
    ) -> int:
        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one root folder is required")

        self.load(db_dsn, trie_key=trie_key, metadata_key=metadata_key, verbose=verbose)

        log.info("Loading items from %s", roots)
        n = 0
        for item in iter_items(roots):
            self.add(item.key, item.value, item.id, item.priority)
            n += 1
        log.info("Engine build() complete: items=%d", n)
        return n

    # ------------- mutations -------------

    def add(self, key: str, value: Any, item_id: Any, priority: float = 0) -> List[str]:
        return self._run(self._require_index().add(key, value, item_id, priority))

    def delete(self, key: str, item_id: Any) -> List[str]:
        return self._run(self._require_index().delete(key, item_id))

    # ------------- query -------------

    # /* ~~~ Run autocomplete for a user query and return ranked metadata ~~~ */
    def complete(self, query: str, *, top_k: int = CFG.TOP_K) -> List[Any]:
        return self._run(complete_query(query, self._require_index(), top_k=top_k))

    def search(self, key: str, limit: Optional[int] = None) -> List[Any]:
        """Raw PrefixIndex.search: raises on an empty key and keeps dangling None entries."""
        return self._run(self._require_index().search(key, limit))

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (store connection, loop thread) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store is not None and self._loop is not None:
                self._run(self._store.close())
        finally:
            self._store = None
            self.index = None
            self._stop_loop()
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_index(self) -> PrefixIndex:
        if self.index is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self.index

    def _start_loop(self) -> None:
        if self._loop is not None:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._loop.run_forever, name="rtrie-loop", daemon=True)
        self._thread.start()

    def _stop_loop(self) -> None:
        loop, thread = self._loop, self._thread
        self._loop = self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join()
        loop.close()

    def _run(self, coro: Awaitable[T]) -> T:
        if self._loop is None:
            coro.close()  # type: ignore[attr-defined]
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()
