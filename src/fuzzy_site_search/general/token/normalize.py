# fuzzy_site_search/general/token/normalize.py
# ──────────────────────────────────────────────────────────────
# Shared utilities for offset-preserving text normalization
# ──────────────────────────────────────────────────────────────
"""
normalize.

Does: Provide deterministic, length-preserving normalization for searchable
      field text and queries: light Unicode hygiene (fancy hyphens/quotes),
      case folding and optional diacritic folding.
Returns: coerce_text(), fold_case(), strip_diacritics(), normalize_text(),
         normalize_query().
Used by: Index building (field text) and the query engine (query text).

Every function here maps one input character to exactly one output character,
so offsets computed on normalized text are valid on the original text.
"""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Any

__all__ = [
    "coerce_text",
    "fold_case",
    "strip_diacritics",
    "normalize_text",
    "normalize_query",
]

# Common “fancy” Unicode punctuation we want to normalize early
_FANCY_HYPHENS = {"‐", "‑", "‒", "–", "—", "−"}  # ‐ - ‒ – — −
_FANCY_QUOTES = {"‘", "’", "‛", "′", "ʼ"}  # ‘ ’ ‛ ′ ʼ

_HYGIENE_TABLE = str.maketrans(
    {**{ch: "-" for ch in _FANCY_HYPHENS}, **{ch: "'" for ch in _FANCY_QUOTES}}
)


# ──────────────────────────────────────────────────────────────
# 0) Value coercion
# ──────────────────────────────────────────────────────────────


def coerce_text(value: Any) -> str | None:
    """
    Does: Turn a raw field value into text.
          - None → None (field treated as missing)
          - str → unchanged
          - list/tuple/set of scalars → space-joined
          - other scalars → str(value)
    Returns: Text or None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        parts = [coerce_text(v) for v in value]
        return " ".join(p for p in parts if p)
    return str(value)


# ──────────────────────────────────────────────────────────────
# 1) Character folds (1:1)
# ──────────────────────────────────────────────────────────────


def _unicode_hygiene(s: str) -> str:
    """Map fancy hyphens to '-' and curly quotes to "'" (1:1)."""
    return s.translate(_HYGIENE_TABLE)


@lru_cache(maxsize=4096)
def _lower_char(ch: str) -> str:
    low = ch.lower()
    return low if len(low) == 1 else ch


@lru_cache(maxsize=4096)
def _base_char(ch: str) -> str:
    if ch.isascii():
        return ch
    decomposed = unicodedata.normalize("NFD", ch)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base if len(base) == 1 else ch


def _per_char(s: str, fold: Any) -> str:
    return "".join(fold(ch) for ch in s)


def fold_case(text: str) -> str:
    """
    Does: Lowercase `text` without changing its length.
          Characters whose lowercase form expands (e.g. 'İ') are kept as-is.
    """
    low = text.lower()
    if len(low) == len(text):
        return low
    return _per_char(text, _lower_char)


def strip_diacritics(text: str) -> str:
    """
    Does: Remove combining marks per character ('ç'→'c', 'ã'→'a'), 1:1.
    Returns: Folded text with the same length as the input.
    """
    if text.isascii():
        return text
    return _per_char(text, _base_char)


# ──────────────────────────────────────────────────────────────
# 2) Field / query normalization
# ──────────────────────────────────────────────────────────────


def normalize_text(
    text: str,
    *,
    case_sensitive: bool = False,
    ignore_diacritics: bool = False,
) -> str:
    """
    Does: Normalize field text for matching:
          - Unicode hygiene (fancy hyphens/quotes)
          - lowercase unless case_sensitive
          - diacritic folding when ignore_diacritics
    Returns: Normalized text, same length as `text`.
    """
    if not isinstance(text, str):
        return ""
    s = _unicode_hygiene(text)
    if not case_sensitive:
        s = fold_case(s)
    if ignore_diacritics:
        s = strip_diacritics(s)
    return s


def normalize_query(
    query: str,
    *,
    case_sensitive: bool = False,
    ignore_diacritics: bool = False,
) -> str:
    """
    Does: Normalize a query like field text, after trimming surrounding
          whitespace. Returns "" for non-strings.
    """
    if not isinstance(query, str):
        return ""
    return normalize_text(
        query.strip(),
        case_sensitive=case_sensitive,
        ignore_diacritics=ignore_diacritics,
    )
