# src/e2e/conftest.py
from pathlib import Path
import json
import pytest

from rtrie.DB.memory_store import MemoryStore
from rtrie.DB.index import PrefixIndex


class SpyStore(MemoryStore):
    """MemoryStore that records which read commands were issued."""
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def zrevrange(self, key, start, stop):
        self.calls.append("zrevrange")
        return await super().zrevrange(key, start, stop)

    async def hmget(self, key, fields):
        self.calls.append("hmget")
        return await super().hmget(key, fields)


@pytest.fixture
def store() -> SpyStore:
    return SpyStore()


@pytest.fixture
def index(store: SpyStore) -> PrefixIndex:
    return PrefixIndex(store)


def write_items(root: Path, name: str, items: list[dict]) -> Path:
    """Write items as one JSON object per line under root/name."""
    root.mkdir(parents=True, exist_ok=True)
    path = root / name
    path.write_text("".join(json.dumps(it) + "\n" for it in items), encoding="utf-8")
    return path


CITIES = [
    {"key": "New York", "value": {"name": "New York"}, "id": "nyc", "priority": 8},
    {"key": "Newark", "value": {"name": "Newark"}, "id": "ewr", "priority": 3},
    {"key": "New Orleans", "value": {"name": "New Orleans"}, "id": "msy", "priority": 5},
    {"key": "York", "value": {"name": "York"}, "id": "yrk", "priority": 1},
    {"key": "Zürich", "value": {"name": "Zürich"}, "id": "zrh", "priority": 4},
]


@pytest.fixture
def cities_root(tmp_path: Path) -> str:
    root = tmp_path / "Items"
    write_items(root, "cities.jsonl", CITIES)
    return str(root)
