# tests/test_search_matcher.py
from __future__ import annotations

import pytest
from rapidfuzz.distance import Levenshtein

from fuzzy_site_search.search import matcher as M
from fuzzy_site_search.search.options import SearchOptions
from fuzzy_site_search.search.types import FieldEntry

# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "length, threshold, expected",
    [(13, 0.4, 5), (5, 0.4, 2), (5, 0.0, 0), (5, 1.0, 5), (10, 0.3, 3), (0, 0.4, 0)],
)
def test_error_budget(length, threshold, expected):
    assert M.error_budget(length, threshold) == expected


def test_search_window_clips_to_text_and_location():
    o = SearchOptions(location=50, distance=10)
    assert M.search_window(200, 5, 2, o) == (40, 67, 60)
    assert M.search_window(30, 5, 2, o) == (30, 30, 60)
    assert M.search_window(200, 5, 2, o.replace(ignore_location=True)) == (0, 200, 200)


def test_iter_alignments_exact_only():
    assert list(M.iter_alignments("abc", "xabcx", 0)) == [(1, 4, 0)]


def test_iter_alignments_offsets_are_shifted():
    assert list(M.iter_alignments("abc", "xabcx", 0, offset=10)) == [(11, 14, 0)]


# ─────────────────────────────────────────────────────────────────────────────
# Exact path
# ─────────────────────────────────────────────────────────────────────────────


def test_exact_occurrence_scores_zero_with_span():
    fm = M.find_best_match("lambda", "aws lambda", SearchOptions(), key="title")
    assert fm is not None
    assert (fm.score, fm.errors, fm.start, fm.end) == (0.0, 0, 4, 10)
    assert fm.indices == ((4, 9),)
    assert fm.key == "title"


def test_exact_occurrence_nearest_to_location_wins():
    fm = M.find_best_match("go", "go x go", SearchOptions(location=5))
    assert fm is not None and fm.start == 5


def test_exact_occurrence_found_beyond_distance_window():
    text = "x" * 3000 + "lambda"
    fm = M.find_best_match("lambda", text, SearchOptions(distance=10))
    assert fm is not None and fm.score == 0.0 and fm.start == 3000


def test_find_all_matches_lists_every_occurrence():
    fm = M.find_best_match("go", "go x go", SearchOptions(find_all_matches=True))
    assert fm is not None
    assert fm.indices == ((0, 1), (5, 6))


# ─────────────────────────────────────────────────────────────────────────────
# Fuzzy path
# ─────────────────────────────────────────────────────────────────────────────


def test_single_edit_match_and_highlight_runs():
    fm = M.find_best_match("lamda", "aws lambda", SearchOptions())
    assert fm is not None
    assert fm.errors == 1
    assert (fm.start, fm.end) == (4, 10)
    assert fm.score == pytest.approx(0.2 * (1 + 4 / 1000))
    assert fm.indices == ((4, 6), (8, 9))


def test_fuzzy_match_outside_window_is_rejected():
    text = "x" * 100 + "lambda"
    assert M.find_best_match("lamda", text, SearchOptions(distance=10)) is None
    assert M.find_best_match("lamda", text, SearchOptions(distance=10, ignore_location=True)) is not None


def test_distance_zero_is_exact_location_only():
    o = SearchOptions(distance=0, location=0)
    fm = M.find_best_match("lambda", "lamda xyz", o)
    assert fm is not None and fm.start == 0
    assert fm.score == pytest.approx(1 / 6)
    assert M.find_best_match("lambda", "xyz lamda", o) is None


def test_threshold_zero_admits_exact_only():
    o = SearchOptions(threshold=0.0)
    assert M.find_best_match("lamda", "aws lambda", o) is None
    assert M.find_best_match("lambda", "aws lambda", o) is not None


def test_threshold_one_accepts_anything_even_empty_text():
    o = SearchOptions(threshold=1.0)
    fm = M.find_best_match("zzz", "", o)
    assert fm is not None and fm.score == 1.0
    assert M.find_best_match("qqqq", "golang", o) is not None


def test_min_match_char_length_discards_short_spans():
    o = SearchOptions(min_match_char_length=3)
    assert M.find_best_match("go", "go", o) is None
    fm = M.find_best_match("lambda", "aws lambda", o)
    assert fm is not None and fm.span_length >= 3


def test_empty_pattern_never_matches():
    assert M.find_best_match("", "anything", SearchOptions(threshold=1.0)) is None


@pytest.mark.parametrize(
    "pattern, text",
    [
        ("golang lambda", "creating a rest api with golang and aws lambda"),
        ("pakage", "organizing go projects with package oriented design"),
        ("desing", "package oriented design"),
        ("configuracao", "configuração do ambiente"),
    ],
)
def test_reported_errors_equal_levenshtein_of_span(pattern, text):
    fm = M.find_best_match(pattern, text, SearchOptions())
    assert fm is not None
    assert fm.errors == Levenshtein.distance(pattern, text[fm.start:fm.end])
    assert fm.score <= 0.4


def test_original_text_offsets_match_normalized():
    entry = FieldEntry(name="title", original="AWS Lambda", normalized="aws lambda")
    fm = M.match_field("lambda", entry, SearchOptions())
    assert fm is not None
    assert fm.value[fm.start:fm.end] == "Lambda"


def test_absent_field_never_matches():
    entry = FieldEntry(name="summary", original="", normalized="", present=False)
    assert M.match_field("x", entry, SearchOptions(threshold=1.0)) is None


def test_candidate_regions_skip_text_without_intact_pieces():
    assert M.candidate_regions("lambda", "x" * 500, 2) == []
    assert M.candidate_regions("go", "", 2) == [(0, 0)]


@pytest.mark.parametrize(
    "pattern, text, budget",
    [
        ("golang", "creating a rest api with golang and aws lambda", 2),
        ("pakage", "organizing go projects with package oriented design", 2),
        ("lamda", "aws lambda and a lamb on the lam", 2),
        ("xyz", "abc def", 1),
    ],
)
def test_region_scan_finds_same_alignments_as_full_scan(pattern, text, budget):
    full = list(M.iter_alignments(pattern, text, budget))
    pruned = [
        a
        for lo, hi in M.candidate_regions(pattern, text, budget)
        for a in M.iter_alignments(pattern, text[lo:hi], budget, offset=lo)
    ]
    assert sorted(pruned) == sorted(full)


def test_long_field_without_candidates_is_rejected():
    assert M.find_best_match("golang", "x" * 5000, SearchOptions(ignore_location=True)) is None
