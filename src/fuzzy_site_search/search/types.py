# fuzzy_site_search/search/types.py
from __future__ import annotations

"""
types.py.

Does: Define the immutable value types flowing through the search stack:
      documents, indexed field entries, the index itself, per-field matches
      and ranked results.
"""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .options import SearchOptions

__all__ = [
    "Document",
    "FieldEntry",
    "IndexRecord",
    "Index",
    "FieldMatch",
    "MatchResult",
]

__docformat__ = "google"


@dataclass(frozen=True)
class Document:
    """An opaque identifier plus field name → text."""

    ref: Hashable
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class FieldEntry:
    """One searchable field of one document, original and normalized."""

    name: str
    original: str
    normalized: str
    present: bool = True


@dataclass(frozen=True)
class IndexRecord:
    """A document plus its per-key field entries, in `keys` order."""

    position: int
    document: Document
    entries: tuple[FieldEntry, ...]

    @property
    def ref(self) -> Hashable:
        return self.document.ref


@dataclass(frozen=True)
class Index:
    """Immutable, queryable structure built once from a corpus and options."""

    records: tuple[IndexRecord, ...]
    options: SearchOptions
    locale: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    @property
    def keys(self) -> tuple[str, ...]:
        return self.options.keys


@dataclass(frozen=True)
class FieldMatch:
    """Best accepted match of the query inside one field.

    `start`/`end` delimit the matched span (end exclusive) in both the
    normalized and the original text; `indices` lists inclusive (start, end)
    runs of matched characters, for highlighting.
    """

    key: str
    score: float
    errors: int
    start: int
    end: int
    value: str
    indices: tuple[tuple[int, int], ...] = ()

    @property
    def span_length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "indices": [list(i) for i in self.indices],
        }


@dataclass(frozen=True)
class MatchResult:
    """One ranked hit. Lower score is better; 0 is perfect."""

    ref: Hashable
    document: Document
    score: float
    position: int
    matched_fields: frozenset[str] = frozenset()
    matches: tuple[FieldMatch, ...] = ()

    def to_dict(self, options: SearchOptions | None = None) -> dict[str, Any]:
        """
        Does: Serialize like a Fuse result: {"item", "refIndex", "score"?, "matches"?}.
              `score`/`matches` follow include_score/include_matches of `options`.
        """
        out: dict[str, Any] = {
            "item": {**dict(self.document.fields), "ref": self.ref},
            "refIndex": self.position,
        }
        if options is None or options.include_score:
            out["score"] = self.score
        if options is not None and options.include_matches:
            out["matches"] = [m.to_dict() for m in self.matches]
        return out
