# fuzzy_site_search/general/utils/__init__.py
"""

Does: Provide JSON/YAML file loading and lightweight debug tracing for the search stack.
Returns: Public API via load_config/clear_config_cache and debug/reload_topics.
Used by: Site locale resolution, corpus loading, the engine, the CLI and tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    DataDirNotFound,
    clear_config_cache,
    load_config,
    temp_data_dir,
)
from .log import (
    debug,
    enable_topics,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # File loading
    "load_config",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "enable_topics",
    "reload_topics",
    "topic_enabled",
]
