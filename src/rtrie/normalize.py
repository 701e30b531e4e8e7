from __future__ import annotations
from typing import List

from unidecode import unidecode

def transliterate(text: str | None) -> str:
    """Best-effort ASCII folding ("Café" -> "Cafe"). Unmappable characters are dropped."""
    if not text:
        return ""
    return unidecode(str(text), errors="ignore")

def normalize_term(text: str | None) -> str:
    """Index form: transliterated + lowercased. Words are trimmed later, when split."""
    return transliterate(text).lower()

def normalize_only(text: str | None) -> str:
    """Lookup form: the whole string is trimmed, never split into prefixes."""
    return transliterate(text).strip().lower()

def prefixes(term: str) -> List[str]:
    """
    Return every non-empty prefix of every word in `term`.

    Words are separated by single spaces and trimmed, so a run of spaces
    produces empty words that contribute nothing:
        prefixes("new york") -> ["n", "ne", "new", "y", "yo", "yor", "york"]
    """
    out: List[str] = []
    for word in term.split(" "):
        word = word.strip()
        out.extend(word[:i] for i in range(1, len(word) + 1))
    return out

def index_keys(text: str | None) -> List[str]:
    """Prefixes of the normalized index form of `text`."""
    return prefixes(normalize_term(text))
