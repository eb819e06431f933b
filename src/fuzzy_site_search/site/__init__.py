# src/fuzzy_site_search/site/__init__.py
"""
site.

Does: Bridge between the host site and the search stack: per-locale resolved
settings (from the site config) and the page corpus (from the search feed).
"""

from __future__ import annotations

from .corpus import documents_from_records, load_corpus
from .locales import (
    LocaleSettings,
    deep_merge,
    default_locale,
    load_site_locales,
    locale_for,
    resolve_locales,
)

__all__ = [
    "LocaleSettings",
    "deep_merge",
    "default_locale",
    "load_site_locales",
    "locale_for",
    "resolve_locales",
    "documents_from_records",
    "load_corpus",
]

__docformat__ = "google"
