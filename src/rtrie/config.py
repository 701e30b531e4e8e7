from __future__ import annotations
import os

# /* ~~~ store key layout ~~~ */
TRIE_KEY: str = "trie:index:"        # sorted set per prefix: <TRIE_KEY><prefix>
METADATA_KEY: str = "trie:metadata"  # one hash: id -> json(value)

# Search defaults
SEARCH_LIMIT: int = 20
TOP_K: int = 10  # default result count for the CLI / web UI

# Store DSN: "redis://host:port/db" or "memory://"
DEFAULT_DSN: str = os.environ.get("RTRIE_DSN", "memory://")

# Connection parameters used when no DSN/client is supplied
REDIS_HOST: str = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT: int = int(os.environ.get("REDIS_PORT", 6379))
REDIS_PASSWORD: str | None = os.environ.get("REDIS_PASSWORD") or None

# Bulk loader: file types scanned under --roots
LOADER_EXTS = [".jsonl"]

# Progress logging (set RTRIE_VERBOSE=1 to enable)
VERBOSE = os.environ.get("RTRIE_VERBOSE") == "1"
