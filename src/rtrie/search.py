from __future__ import annotations
from typing import Any, List

from .DB.index import PrefixIndex
from .normalize import normalize_only
from .config import TOP_K

# Complete the query against the index, returning top-k results.

async def complete_query(query: str, index: PrefixIndex, top_k: int = TOP_K) -> List[Any]:
    """
    UI-facing search: a blank query is simply "no results" instead of an
    InvalidArgument, and ids whose metadata was deleted are dropped.
    """
    if not normalize_only(query):
        return []
    rows = await index.search(query, limit=top_k)
    return [r for r in rows if r is not None]
