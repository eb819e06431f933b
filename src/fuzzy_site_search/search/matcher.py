# src/fuzzy_site_search/search/matcher.py
from __future__ import annotations

"""
matcher.py

Does: Approximate matching of one normalized query against one field's
      normalized text: exact fast path, then a bounded edit-distance scan
      (semi-global DP, one column per text character) over the window of
      admissible start offsets around `location`, restricted to the regions
      where one piece of the query occurs intact.
Returns: find_best_match() on raw strings, match_field() on indexed entries.
Used by: The query engine, once per (document, key).
"""

import logging
import math
from collections.abc import Iterator

from rapidfuzz.distance import Levenshtein

from fuzzy_site_search.general.utils.log import debug, topic_enabled

from .options import SearchOptions
from .scoring import SCORE_EPSILON, compute_score, is_accepted
from .types import FieldEntry, FieldMatch

__all__ = [
    "error_budget",
    "search_window",
    "candidate_regions",
    "iter_alignments",
    "find_best_match",
    "match_field",
]

__docformat__ = "google"

log = logging.getLogger(__name__)

_TOPIC = "matcher"


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def error_budget(pattern_length: int, threshold: float) -> int:
    """
    Does: Max edits a match may carry and still be accepted. Proximity only
          inflates a score, so errors > threshold * len can never pass.
    Returns: int in [0, pattern_length].
    """
    return max(0, min(pattern_length, math.floor(threshold * pattern_length + SCORE_EPSILON)))


def search_window(text_length: int, pattern_length: int, budget: int, options: SearchOptions) -> tuple[int, int, int]:
    """
    Does: Compute the text slice to scan and the last admissible start offset.
          Starts lie in [location - distance, location + distance]; the slice
          extends past the last start by the pattern length plus the budget.
    Returns: (lo, hi, max_start) with 0 <= lo, hi <= text_length.
    """
    if options.ignore_location:
        return 0, text_length, text_length
    lo = max(0, options.location - options.distance)
    max_start = options.location + options.distance
    hi = min(text_length, max_start + pattern_length + budget)
    return min(lo, text_length), max(hi, min(lo, text_length)), max_start


def _exact_occurrences(pattern: str, text: str) -> list[int]:
    out: list[int] = []
    i = text.find(pattern)
    while i != -1:
        out.append(i)
        i = text.find(pattern, i + 1)
    return out


def _equal_runs(pattern: str, span_text: str, offset: int, min_len: int) -> tuple[tuple[int, int], ...]:
    """
    Does: Characters of the span that align as 'equal' against the pattern,
          as inclusive (start, end) runs; runs shorter than min_len dropped.
    """
    floor = max(1, min_len)
    runs: list[tuple[int, int]] = []
    for op in Levenshtein.opcodes(pattern, span_text):
        if op.tag != "equal":
            continue
        if op.dest_end - op.dest_start >= floor:
            runs.append((offset + op.dest_start, offset + op.dest_end - 1))
    return tuple(runs)


# ─────────────────────────────────────────────────────────────────────────────
# 1) Bounded alignment scan
# ─────────────────────────────────────────────────────────────────────────────

def candidate_regions(pattern: str, text: str, max_errors: int) -> list[tuple[int, int]]:
    """
    Does: Split `pattern` into max_errors + 1 pieces. Any alignment with at most
          max_errors edits keeps one piece intact, so it lies within
          [q - off - max_errors, q - off + len(pattern) + max_errors] for some
          exact occurrence q of a piece starting at pattern offset `off`.
    Returns: Sorted, merged (start, end) slices of `text` worth scanning;
             the whole text when pieces would be empty.
    """
    m, n = len(pattern), len(text)
    if max_errors >= m:
        return [(0, n)]
    size, extra = divmod(m, max_errors + 1)
    spans: list[tuple[int, int]] = []
    off = 0
    for p in range(max_errors + 1):
        length = size + (1 if p < extra else 0)
        for q in _exact_occurrences(pattern[off:off + length], text):
            spans.append((max(0, q - off - max_errors), min(n, q - off + m + max_errors)))
        off += length

    spans.sort()
    merged: list[tuple[int, int]] = []
    for s, e in spans:
        if merged and s <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], e))
        else:
            merged.append((s, e))
    return merged


def iter_alignments(pattern: str, text: str, max_errors: int, *, offset: int = 0) -> Iterator[tuple[int, int, int]]:
    """
    Does: Semi-global edit distance of `pattern` against every substring of
          `text` (free start, free end), one DP column per text character,
          tracking where each optimal alignment starts.
    Returns: Iterator of (start, end, errors) per end offset whose best
             alignment needs <= max_errors edits (offsets shifted by `offset`).
    """
    m = len(pattern)
    cost = list(range(m + 1))
    start = [offset] * (m + 1)
    if cost[m] <= max_errors:
        yield start[m], offset, cost[m]

    for j, ch in enumerate(text, 1):
        prev_cost, prev_start = cost, start
        cost = [0] * (m + 1)
        start = [offset + j] * (m + 1)
        for i in range(1, m + 1):
            best = prev_cost[i - 1] + (pattern[i - 1] != ch)
            origin = prev_start[i - 1]
            skip_text = prev_cost[i] + 1
            if skip_text < best:
                best, origin = skip_text, prev_start[i]
            skip_pattern = cost[i - 1] + 1
            if skip_pattern < best:
                best, origin = skip_pattern, start[i - 1]
            cost[i] = best
            start[i] = origin
        if cost[m] <= max_errors:
            yield start[m], offset + j, cost[m]


# ─────────────────────────────────────────────────────────────────────────────
# 2) Best match in one field
# ─────────────────────────────────────────────────────────────────────────────

def find_best_match(pattern: str, text: str, options: SearchOptions, *, key: str = "", value: str | None = None) -> FieldMatch | None:
    """
    Does: Best accepted match of `pattern` in `text` (both normalized).
          1) exact occurrence anywhere → score 0 (nearest to location wins)
          2) bounded edit-distance scan inside the location window
          Candidates shorter than min_match_char_length are discarded.
    Returns: FieldMatch (offsets valid on `value`, the original text), or None.
    """
    m = len(pattern)
    if m == 0:
        return None
    original = text if value is None else value
    min_len = options.min_match_char_length
    loc = options.location

    # 1) exact
    if min_len == 0 or m >= min_len:
        occurrences = _exact_occurrences(pattern, text)
        if occurrences:
            best_start = min(occurrences, key=lambda s: (abs(s - loc), s))
            if options.find_all_matches:
                indices = tuple((s, s + m - 1) for s in occurrences)
            else:
                indices = ((best_start, best_start + m - 1),)
            return FieldMatch(
                key=key,
                score=0.0,
                errors=0,
                start=best_start,
                end=best_start + m,
                value=original,
                indices=indices,
            )

    # 2) fuzzy
    budget = error_budget(m, options.threshold)
    if budget == 0:
        return None
    lo, hi, max_start = search_window(len(text), m, budget, options)

    best: tuple[float, int, int, int, int] | None = None  # (score, errors, dist, start, end)
    window = text[lo:hi]
    for r_lo, r_hi in candidate_regions(pattern, window, budget):
        for s, e, errors in iter_alignments(pattern, window[r_lo:r_hi], budget, offset=lo + r_lo):
            if s > max_start:
                continue
            if min_len and e - s < min_len:
                continue
            score = compute_score(m, errors, s, options)
            if not is_accepted(score, options):
                continue
            cand = (score, errors, abs(s - loc), s, e)
            if best is None or cand < best:
                best = cand

    if best is None:
        if topic_enabled(_TOPIC):
            debug(f"no match for {pattern!r} in {key or '<text>'} (window {lo}:{hi})", topic=_TOPIC)
        return None

    score, errors, _, s, e = best
    if topic_enabled(_TOPIC):
        debug(f"{pattern!r} ~ {text[s:e]!r} in {key or '<text>'}: errors={errors} score={score:.4f}", topic=_TOPIC)
    return FieldMatch(
        key=key,
        score=score,
        errors=errors,
        start=s,
        end=e,
        value=original,
        indices=_equal_runs(pattern, text[s:e], s, min_len),
    )


def match_field(pattern: str, entry: FieldEntry, options: SearchOptions) -> FieldMatch | None:
    """
    Does: find_best_match on an indexed field; absent fields never match.
    Returns: FieldMatch or None (field score 1, contributes nothing).
    """
    if not entry.present:
        return None
    return find_best_match(pattern, entry.normalized, options, key=entry.name, value=entry.original)
