# tests/test_site_corpus.py
from __future__ import annotations

import json

from fuzzy_site_search.general.utils import clear_config_cache
from fuzzy_site_search.search import SearchEngine, SearchOptions
from fuzzy_site_search.site import documents_from_records, load_corpus

RECORDS = [
    {
        "title": "Creating a REST API with Golang and AWS Lambda",
        "permalink": "https://example.org/en/posts/golang-lambda/",
        "summary": "Serverless REST API in Go",
        "content": "We deploy on AWS Lambda.",
        "date": "2024-01-01",
    },
    {"id": 7, "title": "Organizing Go Projects", "tags": ["go", "design"]},
]


def test_documents_from_records_refs_and_key_filter():
    docs = documents_from_records(RECORDS, keys=["title"])
    assert docs[0].ref == "https://example.org/en/posts/golang-lambda/"
    assert docs[1].ref == 7
    assert set(docs[0].fields) == {"title", "permalink"}
    assert "tags" not in docs[1].fields


def test_documents_from_records_keeps_everything_without_keys():
    docs = documents_from_records(RECORDS)
    assert docs[1].fields["tags"] == ["go", "design"]


def test_list_fields_are_searchable():
    engine = SearchEngine(documents_from_records(RECORDS), SearchOptions(keys=("tags",)))
    assert [r.ref for r in engine.search("design")] == [7]


def test_load_corpus_from_json_file(tmp_path):
    p = tmp_path / "index.json"
    p.write_text(json.dumps(RECORDS), encoding="utf-8")
    clear_config_cache()
    docs = load_corpus(str(p))
    assert len(docs) == 2
    assert docs[0].get("summary") == "Serverless REST API in Go"
