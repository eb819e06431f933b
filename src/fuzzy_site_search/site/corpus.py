# src/fuzzy_site_search/site/corpus.py
from __future__ import annotations

"""
corpus.py

Does: Adapt the site's search feed (`index.json`: one record per localized
      page with title/permalink/summary/content) into Documents.
Returns: documents_from_records(), load_corpus().
Used by: The CLI and hosts feeding a SearchEngine from generated site output.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any

from fuzzy_site_search.general.utils.load_config import load_config
from fuzzy_site_search.search.index import as_document
from fuzzy_site_search.search.types import Document

__all__ = ["documents_from_records", "load_corpus"]

log = logging.getLogger(__name__)


def documents_from_records(
    records: Iterable[Mapping[str, Any]],
    keys: Iterable[str] | None = None,
) -> tuple[Document, ...]:
    """
    Does: One Document per record; ref = id → permalink → position.
          With `keys`, only those fields (plus id/permalink) are kept.
    """
    wanted = None if keys is None else {*keys, "id", "permalink"}
    docs: list[Document] = []
    for position, record in enumerate(records):
        if wanted is not None and isinstance(record, Mapping):
            record = {k: v for k, v in record.items() if k in wanted}
        docs.append(as_document(record, position))
    return tuple(docs)


def load_corpus(
    file: str | os.PathLike[str],
    keys: Iterable[str] | None = None,
) -> tuple[Document, ...]:
    """Does: Read a JSON/YAML list of page records and adapt it."""
    records = load_config(file, mode="records")
    docs = documents_from_records(records, keys)
    log.debug("Loaded corpus %s: %d documents", os.fspath(file), len(docs))
    return docs
