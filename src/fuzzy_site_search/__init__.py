"""
fuzzy_site_search
=================

Does: Fuzzy full-text search over a small multilingual site corpus, driven by
      the site's search options (case sensitivity, location/distance/threshold,
      minimum match length, limit, searchable keys).
Returns: Re-exports the public search API (`build_index`, `search`,
         `SearchEngine`, `SearchOptions`, `ConfigurationError`).
Used by: Site tooling, the `site-search` CLI, and tests.
"""

from .search import (
    ConfigurationError,
    Document,
    FieldMatch,
    Index,
    MatchResult,
    SearchEngine,
    SearchOptions,
    build_index,
    search,
)

__all__ = [
    "ConfigurationError",
    "Document",
    "FieldMatch",
    "Index",
    "MatchResult",
    "SearchEngine",
    "SearchOptions",
    "build_index",
    "search",
]
__docformat__ = "google"
