from __future__ import annotations

import pytest

from fuzzy_site_search.general.token import normalize as N

"""
Tests: general/token/normalize.py

Goals:
- Case/diacritic folding is 1:1 (offsets on normalized text index the original)
- Unicode hygiene maps fancy hyphens/quotes
- Query normalization trims and tolerates non-strings
"""


# ──────────────────────────────────────────────────────────────────────────────
# coerce_text
# ──────────────────────────────────────────────────────────────────────────────

def test_coerce_text_handles_missing_lists_and_scalars():
    assert N.coerce_text(None) is None
    assert N.coerce_text("Golang") == "Golang"
    assert N.coerce_text(["go", "aws", None, ""]) == "go aws"
    assert N.coerce_text(2024) == "2024"


# ──────────────────────────────────────────────────────────────────────────────
# folds
# ──────────────────────────────────────────────────────────────────────────────

def test_fold_case_basic():
    assert N.fold_case("Creating a REST API") == "creating a rest api"


def test_fold_case_keeps_length_when_lowercase_expands():
    s = "İstanbul Go"
    out = N.fold_case(s)
    assert len(out) == len(s)
    assert out.endswith("stanbul go")


def test_strip_diacritics_portuguese():
    assert N.strip_diacritics("Configuração") == "Configuracao"
    assert N.strip_diacritics("você já") == "voce ja"
    assert N.strip_diacritics("plain ascii") == "plain ascii"


@pytest.mark.parametrize(
    "text",
    [
        "Diário Dev",
        "Ação – já’s",
        "İİİ ÀÉÎÕÜ ß",
        "",
    ],
)
def test_normalize_text_is_length_preserving(text):
    out = N.normalize_text(text, ignore_diacritics=True)
    assert len(out) == len(text)


# ──────────────────────────────────────────────────────────────────────────────
# normalize_text / normalize_query
# ──────────────────────────────────────────────────────────────────────────────

def test_normalize_text_hygiene_case_and_diacritics():
    assert N.normalize_text("Ação – já", ignore_diacritics=True) == "acao - ja"
    assert N.normalize_text("Ação – já") == "ação - já"
    assert N.normalize_text("It’s Go", case_sensitive=True) == "It's Go"


def test_normalize_text_non_string():
    assert N.normalize_text(None) == ""  # type: ignore[arg-type]


def test_normalize_query_trims_and_folds():
    assert N.normalize_query("  AWS Lambda \n") == "aws lambda"
    assert N.normalize_query("  AWS ", case_sensitive=True) == "AWS"
    assert N.normalize_query(None) == ""  # type: ignore[arg-type]
