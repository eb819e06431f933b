# fuzzy_site_search/general/token/__init__.py
"""
token.

Does: Facade for offset-preserving text normalization.
Used by: Index building and query normalization.
"""

from __future__ import annotations

from .normalize import (
    coerce_text,
    fold_case,
    normalize_query,
    normalize_text,
    strip_diacritics,
)

__all__ = [
    "coerce_text",
    "fold_case",
    "strip_diacritics",
    "normalize_text",
    "normalize_query",
]

__docformat__ = "google"
