from __future__ import annotations
from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class IndexItem:
    key: str                  # raw term, normalized at index time
    value: Any                # metadata payload (JSON-serializable)
    id: str                   # identifier, row key into the metadata hash
    priority: float = 0       # rank inside every prefix set
