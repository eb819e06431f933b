"""
log.py.

Does: Lightweight debug tracer controlled by SITE_SEARCH_DEBUG_TOPICS (comma-sep or 'all').
Returns: Prints timestamped lines with topic + level. Used by the engine/matcher and the CLI.
"""

import os
import sys
from datetime import datetime
from typing import TextIO

__all__ = ["debug", "enable_topics", "reload_topics", "topic_enabled"]

_ENV_VAR = "SITE_SEARCH_DEBUG_TOPICS"


def _load_topics() -> set[str]:
    raw = os.getenv(_ENV_VAR, "")
    return {t.strip().lower() for t in raw.split(",") if t.strip()}


_DEBUG_TOPICS = _load_topics()


def reload_topics() -> None:
    """Does: Reload topics from environment variable SITE_SEARCH_DEBUG_TOPICS."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _load_topics()


def enable_topics(*topics: str) -> None:
    """Does: Enable extra topics at runtime (e.g. CLI --debug → 'all')."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _DEBUG_TOPICS | {t.strip().lower() for t in topics if t.strip()}


def topic_enabled(topic: str) -> bool:
    """Does: True when `topic` (or 'all') is enabled. Nothing is enabled by default."""
    return bool(_DEBUG_TOPICS) and ("all" in _DEBUG_TOPICS or topic.lower().strip() in _DEBUG_TOPICS)


def debug(
    msg: str,
    topic: str = "search",
    *,
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """Does: Print a timestamped debug line with topic and level
    if enabled via SITE_SEARCH_DEBUG_TOPICS.
    """
    if not topic_enabled(topic):
        return
    if stream is None:
        stream = sys.stderr
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{ts}] [{topic.lower().strip()}][{level.upper()}] {msg}", file=stream)
