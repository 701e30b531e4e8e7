from __future__ import annotations
import json
import logging
import os
from typing import Iterable, Iterator, List

from .models import IndexItem
from .config import LOADER_EXTS, VERBOSE

log = logging.getLogger(__name__)

PROGRESS_EVERY_ITEMS = 10_000

def _iter_item_files(roots: Iterable[str]) -> Iterator[str]:
    """Yield paths of *.jsonl files recursively under each root."""
    for root in roots:
        root = os.path.abspath(root)
        for dirpath, _, filenames in os.walk(root):
            for fn in sorted(filenames):
                if os.path.splitext(fn)[1].lower() in LOADER_EXTS:
                    yield os.path.join(dirpath, fn)

def parse_item(obj: object) -> IndexItem:
    """Turn one decoded JSON line into an IndexItem; raises ValueError if fields are missing."""
    if not isinstance(obj, dict):
        raise ValueError("expected a JSON object")
    missing = [f for f in ("key", "value", "id") if obj.get(f) is None]
    if missing:
        raise ValueError(f"missing field(s): {', '.join(missing)}")
    priority = obj.get("priority") or 0
    if not isinstance(priority, (int, float)) or isinstance(priority, bool):
        raise ValueError(f"priority must be a number, got {priority!r}")
    return IndexItem(key=str(obj["key"]), value=obj["value"], id=str(obj["id"]), priority=priority)

def iter_items(roots: Iterable[str]) -> Iterator[IndexItem]:
    """
    Scan roots for *.jsonl and yield one IndexItem per line:
        {"key": "New York", "value": {...}, "id": "nyc", "priority": 8}
    Blank lines are ignored, malformed lines are logged and skipped.
    """
    count = 0
    for path in _iter_item_files(roots):
        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("skipping %s: %s", path, exc)
            continue

        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                item = parse_item(json.loads(line))
            except ValueError as exc:
                log.warning("%s:%d: skipped (%s)", path, line_no, exc)
                continue
            yield item
            count += 1
            if VERBOSE and count % PROGRESS_EVERY_ITEMS == 0:
                log.info("[loaded] items=%d", count)

def load_items(roots: List[str]) -> List[IndexItem]:
    return list(iter_items(roots))
