# src/fuzzy_site_search/site/locales.py
from __future__ import annotations

"""
locales.py

Does: Resolve the site's language-keyed settings into one explicit, immutable
      LocaleSettings per language, computed once at startup: top-level params
      are deep-merged with each language's params (language wins) and the
      merged `fuseOpts` block becomes that locale's SearchOptions.
Returns: LocaleSettings, resolve_locales(), default_locale(), locale_for(),
         load_site_locales().
Used by: The CLI and any host that builds one index per locale.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fuzzy_site_search.general.utils.load_config import load_config
from fuzzy_site_search.search.options import ConfigurationError, SearchOptions

__all__ = [
    "LocaleSettings",
    "deep_merge",
    "resolve_locales",
    "default_locale",
    "locale_for",
    "load_site_locales",
]

__docformat__ = "google"

log = logging.getLogger(__name__)

_FALLBACK_LANGUAGE = "en"


@dataclass(frozen=True)
class LocaleSettings:
    """Resolved settings of one site language."""

    code: str
    name: str
    weight: int
    search_options: SearchOptions
    content_dir: str | None = None
    title: str | None = None
    description: str | None = None


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _get_ci(mapping: Mapping[str, Any] | None, name: str, default: Any = None) -> Any:
    """Case-insensitive lookup; site generators lowercase config keys."""
    if not isinstance(mapping, Mapping):
        return default
    if name in mapping:
        return mapping[name]
    wanted = name.lower()
    for k, v in mapping.items():
        if isinstance(k, str) and k.lower() == wanted:
            return v
    return default


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Does: Recursively merge mappings; `override` wins, keys matched
          case-insensitively, nested mappings merged, everything else replaced.
    Returns: New dict (inputs untouched).
    """
    out: dict[str, Any] = dict(base)
    lower_keys = {k.lower(): k for k in out if isinstance(k, str)}
    for k, v in override.items():
        existing_key = lower_keys.get(k.lower(), k) if isinstance(k, str) else k
        current = out.get(existing_key)
        if isinstance(current, Mapping) and isinstance(v, Mapping):
            out[existing_key] = deep_merge(current, v)
        else:
            out[existing_key] = v
    return out


def _weight(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def _primary_tag(language_code: Any) -> str | None:
    if not isinstance(language_code, str) or not language_code.strip():
        return None
    return language_code.strip().replace("_", "-").split("-")[0].lower()


def _params_for(code: str, params: Any) -> Mapping[str, Any]:
    if params is None:
        return {}
    if not isinstance(params, Mapping):
        raise ConfigurationError(
            f"locale {code!r}: params must be a mapping, got {type(params).__name__}",
            option="params",
        )
    return params


def _options_for(code: str, params: Mapping[str, Any]) -> SearchOptions:
    fuse_opts = _get_ci(params, "fuseOpts") or {}
    if not isinstance(fuse_opts, Mapping):
        raise ConfigurationError(
            f"locale {code!r}: fuseOpts must be a mapping, got {type(fuse_opts).__name__}",
            option="fuseOpts",
        )
    try:
        return SearchOptions.from_fuse_opts(fuse_opts)
    except ConfigurationError as e:
        raise ConfigurationError(f"locale {code!r}: {e}", option=e.option) from e


# ─────────────────────────────────────────────────────────────────────────────
# 1) Resolution
# ─────────────────────────────────────────────────────────────────────────────

def default_locale(site_config: Mapping[str, Any]) -> str:
    """
    Does: defaultContentLanguage → lightest-weight language → languageCode's
          primary tag → 'en'.
    """
    explicit = _get_ci(site_config, "defaultContentLanguage")
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip()
    languages = _get_ci(site_config, "languages")
    if isinstance(languages, Mapping) and languages:
        return min(languages, key=lambda c: (_weight(_get_ci(languages[c], "weight")), str(c)))
    return _primary_tag(_get_ci(site_config, "languageCode")) or _FALLBACK_LANGUAGE


def resolve_locales(site_config: Mapping[str, Any]) -> dict[str, LocaleSettings]:
    """
    Does: Build one LocaleSettings per language (ordered by weight, then code).
          Sites without a `languages` block get a single default locale.
    Returns: dict code → LocaleSettings.
    Raises: ConfigurationError naming the offending locale.
    """
    top_params = _get_ci(site_config, "params")
    languages = _get_ci(site_config, "languages")
    site_title = _get_ci(site_config, "title")

    if not isinstance(languages, Mapping) or not languages:
        code = default_locale(site_config)
        languages = {code: {}}

    resolved: list[LocaleSettings] = []
    for code, lang in languages.items():
        code = str(code)
        lang = lang if isinstance(lang, Mapping) else {}
        params = deep_merge(_params_for(code, top_params), _params_for(code, _get_ci(lang, "params")))
        resolved.append(
            LocaleSettings(
                code=code,
                name=str(_get_ci(lang, "languageName") or code),
                weight=_weight(_get_ci(lang, "weight")),
                search_options=_options_for(code, params),
                content_dir=_get_ci(lang, "contentDir"),
                title=_get_ci(lang, "title") or site_title,
                description=_get_ci(lang, "description") or _get_ci(params, "description"),
            )
        )

    resolved.sort(key=lambda s: (s.weight, s.code))
    log.debug("Resolved locales: %s", ", ".join(s.code for s in resolved))
    return {s.code: s for s in resolved}


def locale_for(settings: Mapping[str, LocaleSettings], code: str) -> LocaleSettings:
    """Does: Strict lookup; raises KeyError listing the known codes."""
    try:
        return settings[code]
    except KeyError:
        raise KeyError(f"unknown locale {code!r} (known: {', '.join(settings)})") from None


def load_site_locales(
    file: str | os.PathLike[str],
) -> tuple[dict[str, LocaleSettings], str]:
    """
    Does: Load a site config file (YAML/JSON) and resolve its locales.
    Returns: (locales, default locale code).
    """
    site_config = load_config(file, mode="validated_dict")
    return resolve_locales(site_config), default_locale(site_config)
