# src/fuzzy_site_search/search/options.py
from __future__ import annotations

"""
options.py

Does: Immutable, validated search configuration plus the configuration error type.
      Reads the host site's camelCase `fuseOpts` block verbatim.
Returns: SearchOptions, ConfigurationError, DEFAULT_KEYS.
Used by: Index building, the query engine, and per-locale site settings.
"""

import dataclasses
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "ConfigurationError",
    "SearchOptions",
    "DEFAULT_KEYS",
    "FUSE_OPTION_NAMES",
]

__docformat__ = "google"

log = logging.getLogger(__name__)

# ── Defaults ─────────────────────────────────────────────────────────────────
DEFAULT_KEYS: tuple[str, ...] = ("title", "permalink", "summary", "content")
DEFAULT_LOCATION = 0
DEFAULT_DISTANCE = 1000
DEFAULT_THRESHOLD = 0.4

# host option name → SearchOptions field
FUSE_OPTION_NAMES: dict[str, str] = {
    "isCaseSensitive": "case_sensitive",
    "shouldSort": "sort_results",
    "location": "location",
    "distance": "distance",
    "threshold": "threshold",
    "minMatchCharLength": "min_match_char_length",
    "limit": "limit",
    "keys": "keys",
    "ignoreLocation": "ignore_location",
    "ignoreDiacritics": "ignore_diacritics",
    "includeScore": "include_score",
    "includeMatches": "include_matches",
    "findAllMatches": "find_all_matches",
}

_FUSE_OPTION_NAMES_LOWER = {k.lower(): v for k, v in FUSE_OPTION_NAMES.items()}

_BOOL_FIELDS = (
    "case_sensitive",
    "sort_results",
    "ignore_location",
    "ignore_diacritics",
    "include_score",
    "include_matches",
    "find_all_matches",
)
_NON_NEGATIVE_INT_FIELDS = ("location", "distance", "min_match_char_length", "limit")


class ConfigurationError(ValueError):
    """Raise when a search option value is invalid (never raised mid-query)."""

    def __init__(self, message: str, *, option: str | None = None):
        super().__init__(message)
        self.option = option


def _key_name(key: Any) -> str:
    """Accept 'title' or {'name': 'title', ...} key specs."""
    if isinstance(key, Mapping):
        key = key.get("name")
    if not isinstance(key, str) or not key.strip():
        raise ConfigurationError(f"invalid search key: {key!r}", option="keys")
    return key.strip()


def _coerce_keys(keys: Any) -> tuple[str, ...]:
    if isinstance(keys, (str, Mapping)):
        keys = [keys]
    if not isinstance(keys, Iterable):
        raise ConfigurationError(f"keys must be a sequence, got {type(keys).__name__}", option="keys")
    out: list[str] = []
    for k in keys:
        name = _key_name(k)
        if name not in out:
            out.append(name)
    return tuple(out)


@dataclass(frozen=True)
class SearchOptions:
    """Validated search options.

    Attributes:
        case_sensitive: Disable lowercase folding of text and query.
        sort_results: Order results best-first (stable on corpus order).
        location: Expected offset of a match inside a field.
        distance: Max tolerated offset between expected and actual match start.
            0 means exact-location-only.
        threshold: Max accepted score; 0 admits only exact matches, 1 everything.
        min_match_char_length: Discard matched spans shorter than this; 0 disables.
        limit: Max results returned; 0 means unbounded.
        keys: Searchable field names, in priority order.
        ignore_location: Ignore proximity and scan the whole field.
        ignore_diacritics: Fold accents on text and query ('ç' ~ 'c').
        include_score: Serialize scores in MatchResult.to_dict().
        include_matches: Serialize matched spans in MatchResult.to_dict().
        find_all_matches: Report every exact occurrence span, not only the best.
    """

    case_sensitive: bool = False
    sort_results: bool = True
    location: int = DEFAULT_LOCATION
    distance: int = DEFAULT_DISTANCE
    threshold: float = DEFAULT_THRESHOLD
    min_match_char_length: int = 0
    limit: int = 0
    keys: tuple[str, ...] = DEFAULT_KEYS
    ignore_location: bool = False
    ignore_diacritics: bool = False
    include_score: bool = True
    include_matches: bool = False
    find_all_matches: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _coerce_keys(self.keys))
        if not self.keys:
            raise ConfigurationError("keys must name at least one field", option="keys")

        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(
                    f"{name} must be a bool, got {getattr(self, name)!r}", option=name
                )

        for name in _NON_NEGATIVE_INT_FIELDS:
            value = getattr(self, name)
            if value is None and name == "limit":
                object.__setattr__(self, name, 0)
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an int, got {value!r}", option=name)
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}", option=name)

        threshold = self.threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(
                f"threshold must be a number, got {threshold!r}", option="threshold"
            )
        if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(
                f"threshold must be within [0, 1], got {threshold}", option="threshold"
            )
        object.__setattr__(self, "threshold", float(threshold))

    # ── Constructors ─────────────────────────────────────────────────────────
    @classmethod
    def from_fuse_opts(
        cls,
        opts: Mapping[str, Any] | None,
        *,
        base: SearchOptions | None = None,
    ) -> SearchOptions:
        """
        Does: Build options from the host's camelCase block (e.g. params.fuseOpts).
              Unknown names are logged and ignored; missing names keep `base`/defaults.
        Returns: Validated SearchOptions.
        """
        changes: dict[str, Any] = {}
        for name, value in (opts or {}).items():
            # site generators may lowercase param keys ("iscasesensitive")
            field = _FUSE_OPTION_NAMES_LOWER.get(str(name).lower())
            if field is None:
                log.warning("Ignoring unknown search option %r", name)
                continue
            changes[field] = value
        if base is None:
            return cls(**changes)
        return base.replace(**changes)

    def replace(self, **changes: Any) -> SearchOptions:
        """Does: Return a re-validated copy with `changes` applied."""
        return dataclasses.replace(self, **changes)

    def to_fuse_opts(self) -> dict[str, Any]:
        """Does: Inverse of from_fuse_opts (camelCase dict)."""
        out: dict[str, Any] = {}
        for name, field in FUSE_OPTION_NAMES.items():
            value = getattr(self, field)
            out[name] = list(value) if isinstance(value, tuple) else value
        return out
