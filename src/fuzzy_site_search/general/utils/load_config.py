# src/fuzzy_site_search/general/utils/load_config.py

"""Load JSON/YAML site files (site config, search corpus) with caching and typed coercions.

Modes:
- "raw"             -> return parsed data as-is
- "records"         -> return tuple[dict[str, Any], ...] (a JSON/YAML list of mappings)
- "validated_dict"  -> return dict[str, Any] after an optional validator

Files are resolved under a <data/> directory (env override or upward discovery),
or taken verbatim when an absolute path is given.
Used by the site locale resolver, the corpus loader, the CLI and tests.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any, Literal, overload

import yaml

# ── Public surface ────────────────────────────────────────────────────────────
Mode = Literal["raw", "records", "validated_dict"]
__all__ = [
    "Mode",
    "load_config",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]

_YAML_SUFFIXES = (".yaml", ".yml")
_KNOWN_SUFFIXES = (".json", *_YAML_SUFFIXES)


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """Raise when no 'data' directory is found while walking upwards."""


class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested file cannot be read or resolved."""


class ConfigParseError(ValueError):
    """Raise when JSON/YAML parsing or validation fails for a file."""


class ConfigTypeError(TypeError):
    """Raise when the parsed data doesn't match the expected structure."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
# cache key includes: path, mtime, mode, encoding, validator_present
_CONFIG_CACHE: dict[tuple[Path, float, str, str, bool], Any] = {}


def clear_config_cache() -> None:
    """Empty the in-memory config cache (useful for pytest/hot-reload)."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()
        log.debug("Config cache cleared.")


def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    """Compute candidate 'data'/'Data' directories walking up from start."""
    start = (start or Path.cwd()).resolve()
    cands: list[Path] = []
    for p in [start, *start.parents]:
        for name in ("data", "Data"):
            cands.append((p / name).resolve())
    return cands


def _default_data_dir(start: Path | None = None) -> Path:
    """Return the first existing candidate directory or raise."""
    for cand in _candidate_data_dirs(start):
        if cand.is_dir():
            return cand
    raise DataDirNotFound(
        "No 'data' directory found.\n"
        "Tried:\n  " + "\n  ".join(str(p) for p in _candidate_data_dirs(start))
    )


def _env_data_dir() -> Path | None:
    """Resolve data dir from env if set."""
    for var in ("SITE_SEARCH_DATA_DIR", "DATA_DIR"):
        v = os.environ.get(var)
        if v:
            return Path(os.path.expanduser(v)).resolve()
    return None


def _resolve_path(file: str | os.PathLike[str], base_dir: Path | None) -> Path:
    """Resolve `file` to an existing path, enforcing it stays under the data dir."""
    raw = Path(os.path.expanduser(os.fspath(file)))
    if raw.is_absolute():
        data_dir = raw.parent.resolve()
        names = [raw.name]
    else:
        if base_dir is None:
            base_dir = _env_data_dir() or _default_data_dir()
        data_dir = base_dir.resolve()
        names = [str(raw)]

    # bare names ("hugo", "index") try the known suffixes in order
    if Path(names[0]).suffix.lower() not in _KNOWN_SUFFIXES:
        names = [f"{names[0]}{sfx}" for sfx in _KNOWN_SUFFIXES]

    for name in names:
        path = (data_dir / name).resolve()
        try:
            path.relative_to(data_dir)
        except ValueError as e:
            raise ConfigFileNotFound(
                f"Refusing to access file outside data dir: {path} (base={data_dir})"
            ) from e
        if path.is_file():
            return path

    raise ConfigFileNotFound(
        "Config file not found: " + ", ".join(str(data_dir / n) for n in names)
    )


def _parse(path: Path, encoding: str) -> Any:
    try:
        with path.open("r", encoding=encoding, errors="strict", newline="") as f:
            if path.suffix.lower() in _YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Cannot decode {path} as {encoding}: {e}") from e
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e


@overload
def load_config(
    file: str | os.PathLike[str],
    mode: Literal["raw"] = "raw",
    *,
    base_dir: Path | None = None,
    encoding: str = "utf-8",
    validator: None = ...,
) -> Any: ...
@overload
def load_config(
    file: str | os.PathLike[str],
    mode: Literal["records"] = "records",
    *,
    base_dir: Path | None = None,
    encoding: str = "utf-8",
    validator: None = ...,
) -> tuple[dict[str, Any], ...]: ...
@overload
def load_config(
    file: str | os.PathLike[str],
    mode: Literal["validated_dict"] = "validated_dict",
    *,
    base_dir: Path | None = None,
    encoding: str = "utf-8",
    validator: Callable[[dict[str, Any]], dict[str, Any]] | None = ...,
) -> dict[str, Any]: ...


def load_config(
    file: str | os.PathLike[str],
    mode: Mode = "raw",
    *,
    base_dir: Path | None = None,
    encoding: str = "utf-8",
    validator: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
) -> Any:
    """Load <data>/<file>.(json|yaml|yml), parse, coerce by mode, and cache results."""
    path = _resolve_path(file, base_dir)

    # mtime-based cache key for auto-invalidation when file changes
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    cache_key = (path, mtime, mode, encoding, validator is not None)

    # Cache hit (only when no validator is used, because validator may change output)
    with _CACHE_LOCK:
        if cache_key in _CONFIG_CACHE and validator is None:
            log.debug("Config cache HIT: %s (mode=%s)", path.name, mode)
            return _CONFIG_CACHE[cache_key]

    data = _parse(path, encoding)

    # Coerce by mode
    if mode == "raw":
        result: Any = data

    elif mode == "records":
        if not isinstance(data, list):
            raise ConfigTypeError(
                f"{path.name}: expected list for mode 'records', got {type(data).__name__}"
            )
        bad = [x for x in data if not isinstance(x, Mapping)]
        if bad:
            preview = ", ".join(f"{type(x).__name__}" for x in bad[:3])
            raise ConfigTypeError(
                f"{path.name}: list must contain only mappings for 'records' "
                f"(first bad types: {preview})"
            )
        result = tuple(dict(x) for x in data)

    elif mode == "validated_dict":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigTypeError(
                f"{path.name}: expected dict for mode 'validated_dict', got {type(data).__name__}"
            )
        if validator is not None:
            try:
                data = validator(data)
            except Exception as e:
                raise ConfigParseError(f"{path.name}: validator failed: {e}") from e
        result = data

    else:
        raise ValueError(f"Unknown mode '{mode}'")

    # Store in cache (skip if validator provided)
    if validator is None:
        with _CACHE_LOCK:
            _CONFIG_CACHE[cache_key] = result
            log.debug("Config cache MISS → STORED: %s (mode=%s)", path.name, mode)
    else:
        log.debug("Config loaded (validator present, not cached): %s (mode=%s)", path.name, mode)

    return result


# ── Context manager to temporarily override the data directory ───────────────
class temp_data_dir:
    """Temporarily set the data directory via env for the block."""

    def __init__(self, path: os.PathLike[str] | str):
        self._new = str(path)
        self._old: str | None = None

    def __enter__(self) -> temp_data_dir:
        self._old = os.environ.get("SITE_SEARCH_DATA_DIR")
        os.environ["SITE_SEARCH_DATA_DIR"] = self._new
        clear_config_cache()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._old is None:
            os.environ.pop("SITE_SEARCH_DATA_DIR", None)
        else:
            os.environ["SITE_SEARCH_DATA_DIR"] = self._old
        clear_config_cache()
