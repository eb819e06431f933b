# src/fuzzy_site_search/search/engine.py
from __future__ import annotations

"""
engine.py
=========

Does: Public query entry point. Normalizes the query with the index's folding
      rules, matches it against every searchable field of every document,
      aggregates per document, then ranks and truncates.
Returns:
  - search(index, query, options=None, *, limit=None, should_stop=None) -> list[MatchResult]
  - SearchEngine(documents, options, *, locale=None): build-once, query-many wrapper
Used by: The `site-search` CLI, site tooling, and tests.

Queries are pure: the Index is never mutated and no shared state is written,
so one Index may serve any number of concurrent searches.
"""

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fuzzy_site_search.general.token import normalize_query
from fuzzy_site_search.general.utils.log import debug, topic_enabled

from .index import build_index
from .matcher import match_field
from .options import SearchOptions
from .scoring import aggregate, rank
from .types import Document, FieldMatch, Index, MatchResult

__all__ = ["search", "SearchEngine", "QUERY_TIME_FIELDS"]

__docformat__ = "google"

log = logging.getLogger(__name__)

_TOPIC = "search"

# options a caller may vary per query; the rest are baked into the index
QUERY_TIME_FIELDS: frozenset[str] = frozenset(
    {
        "threshold",
        "location",
        "distance",
        "ignore_location",
        "min_match_char_length",
        "find_all_matches",
        "sort_results",
        "limit",
        "include_score",
        "include_matches",
    }
)


def _effective_options(index: Index, options: SearchOptions | None) -> SearchOptions:
    """
    Does: Query-time knobs from `options`; keys and folding rules from the index.
          Both inputs are already validated, so the merged copy is assembled
          field by field without running validation again.
    """
    if options is None or options is index.options:
        return index.options
    merged = object.__new__(SearchOptions)
    for f in dataclasses.fields(SearchOptions):
        source = options if f.name in QUERY_TIME_FIELDS else index.options
        object.__setattr__(merged, f.name, getattr(source, f.name))
    return merged


def search(
    index: Index,
    query: str,
    options: SearchOptions | None = None,
    *,
    limit: int | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> list[MatchResult]:
    """
    Does: Rank the documents of `index` against `query`.
          - empty/blank query or empty corpus → []
          - per document: best field score among accepted fields
          - stable best-first order (ties in corpus order) when sort_results
          - `limit` (per call) > options.limit; 0 means unbounded
          - `should_stop` is polled between documents; when it returns True
            the results gathered so far are ranked and returned
    Returns: Fresh list of MatchResult owned by the caller.
    """
    opts = _effective_options(index, options)
    pattern = normalize_query(
        query,
        case_sensitive=index.options.case_sensitive,
        ignore_diacritics=index.options.ignore_diacritics,
    )
    if not pattern or not index.records:
        return []

    hits: list[MatchResult] = []
    for record in index.records:
        if should_stop is not None and should_stop():
            log.debug("Search for %r stopped early after %d hits", pattern, len(hits))
            break
        matches: list[FieldMatch] = []
        for entry in record.entries:
            fm = match_field(pattern, entry, opts)
            if fm is not None:
                matches.append(fm)
        result = aggregate(record, matches)
        if result is not None:
            hits.append(result)

    ranked = rank(hits, opts, limit=limit)
    if topic_enabled(_TOPIC):
        debug(
            f"query={pattern!r} locale={index.locale} matched={len(hits)} returned={len(ranked)}",
            topic=_TOPIC,
        )
    return ranked


class SearchEngine:
    """Build an Index once for a corpus/options pair, then serve queries."""

    def __init__(
        self,
        documents: Iterable[Document | Mapping[str, Any]],
        options: SearchOptions | None = None,
        *,
        locale: str | None = None,
    ):
        self._index = build_index(documents, options or SearchOptions(), locale=locale)

    @property
    def index(self) -> Index:
        return self._index

    @property
    def options(self) -> SearchOptions:
        return self._index.options

    @property
    def locale(self) -> str | None:
        return self._index.locale

    def __len__(self) -> int:
        return len(self._index)

    def search(
        self,
        query: str,
        *,
        limit: int | None = None,
        options: SearchOptions | None = None,
    ) -> list[MatchResult]:
        return search(self._index, query, options, limit=limit)

    def search_dicts(self, query: str, *, limit: int | None = None) -> list[dict[str, Any]]:
        """Does: search() serialized like Fuse results (honors include_* options)."""
        return [r.to_dict(self.options) for r in self.search(query, limit=limit)]
