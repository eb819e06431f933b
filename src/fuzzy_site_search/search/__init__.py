# src/fuzzy_site_search/search/__init__.py
"""
search.

Does: Facade exposing the fuzzy search stack: options, index building,
approximate matching, scoring/ranking and the query engine.

Returns: Public API for building an immutable Index and querying it.
Used by: The package root, the site helpers and the CLI.
"""

from __future__ import annotations

# ── Options ──────────────────────────────────────────────────────────────────
from .options import (
    DEFAULT_KEYS,
    ConfigurationError,
    SearchOptions,
)

# ── Types ────────────────────────────────────────────────────────────────────
from .types import (
    Document,
    FieldEntry,
    FieldMatch,
    Index,
    IndexRecord,
    MatchResult,
)

# ── Index ────────────────────────────────────────────────────────────────────
from .index import as_document, build_index

# ── Matching & scoring ───────────────────────────────────────────────────────
from .matcher import find_best_match, match_field
from .scoring import aggregate, compute_score, rank

# ── Engine ───────────────────────────────────────────────────────────────────
from .engine import SearchEngine, search

__all__ = [
    # Options
    "DEFAULT_KEYS",
    "ConfigurationError",
    "SearchOptions",
    # Types
    "Document",
    "FieldEntry",
    "FieldMatch",
    "Index",
    "IndexRecord",
    "MatchResult",
    # Index
    "as_document",
    "build_index",
    # Matching & scoring
    "find_best_match",
    "match_field",
    "compute_score",
    "aggregate",
    "rank",
    # Engine
    "SearchEngine",
    "search",
]

__docformat__ = "google"
