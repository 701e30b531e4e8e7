"""
rtrie: prefix autocomplete over an ordered key-value store

Every word of an indexed term is split into its prefixes ("cat" -> "c",
"ca", "cat"); each prefix is a Redis sorted set of ids ranked by priority,
and each id's metadata lives once in a shared hash. A search is one
ranked range read plus one batched hash read.

Example Usage:
    from rtrie import PrefixIndex, RedisStore

    index = PrefixIndex(RedisStore.from_url("redis://localhost:6379/0"))
    await index.add("New York", {"name": "New York", "pop": 8_400_000}, "nyc", 8)
    await index.search("new")      # -> [{"name": "New York", ...}]
    await index.delete("New York", "nyc")

The synchronous Engine wraps the same operations for the CLI and web app.
"""

from .DB.index import PrefixIndex
from .DB.api import TrieStore, TrieBatch, make_store
from .DB.memory_store import MemoryStore
from .DB.redis_store import RedisStore
from .engine import Engine
from .errors import RtrieError, InvalidArgument, StoreError
from .models import IndexItem
from .normalize import normalize_only, normalize_term, prefixes, transliterate

__version__ = "1.0.0"
__all__ = [
    "PrefixIndex", "TrieStore", "TrieBatch", "make_store", "MemoryStore", "RedisStore",
    "Engine", "RtrieError", "InvalidArgument", "StoreError", "IndexItem",
    "normalize_only", "normalize_term", "prefixes", "transliterate",
]
