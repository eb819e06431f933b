# src/fuzzy_site_search/search/index.py
from __future__ import annotations

"""
index.py

Does: Build the immutable search index: for every document and every configured
      key, extract the field text, keep the original, and store a normalized
      copy (case/diacritic folded per options) with identical offsets.
Returns: build_index(), as_document().
Used by: SearchEngine and direct callers of search().
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fuzzy_site_search.general.token import coerce_text, normalize_text

from .options import SearchOptions
from .types import Document, FieldEntry, Index, IndexRecord

__all__ = ["build_index", "as_document"]

__docformat__ = "google"

log = logging.getLogger(__name__)

# id-like fields tried (in order) when adapting a plain mapping
_REF_FIELDS = ("id", "permalink")


def as_document(raw: Document | Mapping[str, Any], position: int) -> Document:
    """
    Does: Adapt a plain mapping to a Document; ref = id → permalink → position.
    Returns: Document (unchanged if already one).
    """
    if isinstance(raw, Document):
        return raw
    if not isinstance(raw, Mapping):
        raise TypeError(f"document #{position} must be a mapping, got {type(raw).__name__}")
    ref: Any = position
    for name in _REF_FIELDS:
        value = raw.get(name)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and value != "":
            ref = value
            break
    return Document(ref=ref, fields=raw)


def _field_entry(doc: Document, key: str, options: SearchOptions) -> FieldEntry:
    text = coerce_text(doc.get(key))
    if text is None:
        return FieldEntry(name=key, original="", normalized="", present=False)
    return FieldEntry(
        name=key,
        original=text,
        normalized=normalize_text(
            text,
            case_sensitive=options.case_sensitive,
            ignore_diacritics=options.ignore_diacritics,
        ),
    )


def build_index(
    documents: Iterable[Document | Mapping[str, Any]],
    options: SearchOptions | None = None,
    *,
    locale: str | None = None,
) -> Index:
    """
    Does: Single batch pass over the corpus producing one IndexRecord per
          document (corpus order kept), each holding one FieldEntry per key.
          Missing fields are recorded as not present, never an error.
    Returns: Ready, immutable Index.
    Raises: ConfigurationError via SearchOptions validation (empty keys,
            out-of-range numbers); TypeError for non-mapping documents.
    """
    if options is None:
        options = SearchOptions()

    records: list[IndexRecord] = []
    missing = 0
    for position, raw in enumerate(documents):
        doc = as_document(raw, position)
        entries = tuple(_field_entry(doc, key, options) for key in options.keys)
        missing += sum(1 for e in entries if not e.present)
        records.append(IndexRecord(position=position, document=doc, entries=entries))

    log.debug(
        "Built index: %d documents, keys=%s, locale=%s, missing fields=%d",
        len(records),
        ",".join(options.keys),
        locale,
        missing,
    )
    return Index(records=tuple(records), options=options, locale=locale)
