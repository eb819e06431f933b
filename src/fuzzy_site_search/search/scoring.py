# src/fuzzy_site_search/search/scoring.py
from __future__ import annotations

"""
scoring.py

Does: Score blending (edit accuracy × location proximity), per-document
      aggregation across fields, and ranking (dedupe, stable sort, limit).
Returns: proximity(), compute_score(), is_accepted(), aggregate(), rank().
Used by: The approximate matcher (per-candidate scores) and the query engine.
"""

from collections.abc import Hashable, Iterable, Sequence

from .options import SearchOptions
from .types import FieldMatch, IndexRecord, MatchResult

__all__ = [
    "proximity",
    "compute_score",
    "is_accepted",
    "aggregate",
    "rank",
]

__docformat__ = "google"

# ── Tunables ─────────────────────────────────────────────────────────────────
PROXIMITY_WEIGHT = 1.0  # how much a far-away start inflates the edit penalty
SCORE_EPSILON = 1e-9    # float slack for threshold comparisons


# ─────────────────────────────────────────────────────────────────────────────
# 1) Candidate scoring
# ─────────────────────────────────────────────────────────────────────────────

def proximity(start: int, options: SearchOptions) -> float:
    """
    Does: min(distance, |start - location|) / distance.
    Returns: [0,1]; 0 when distance == 0 or ignore_location.
    """
    if options.ignore_location or options.distance == 0:
        return 0.0
    return min(options.distance, abs(start - options.location)) / options.distance


def compute_score(pattern_length: int, errors: int, start: int, options: SearchOptions) -> float:
    """
    Does: accuracy = errors / max(len, 1), inflated by proximity:
          accuracy * (1 + PROXIMITY_WEIGHT * proximity), clamped to [0,1].
          Non-decreasing in both errors and distance from `location`;
          0 only for exact matches.
    Returns: Score in [0,1], lower is better.
    """
    accuracy = min(1.0, max(0.0, errors / max(pattern_length, 1)))
    score = accuracy * (1.0 + PROXIMITY_WEIGHT * proximity(start, options))
    return min(1.0, max(0.0, score))


def is_accepted(score: float, options: SearchOptions) -> bool:
    return score <= options.threshold + SCORE_EPSILON


# ─────────────────────────────────────────────────────────────────────────────
# 2) Per-document aggregation
# ─────────────────────────────────────────────────────────────────────────────

def aggregate(record: IndexRecord, field_matches: Sequence[FieldMatch]) -> MatchResult | None:
    """
    Does: Collapse accepted field matches into one result; document score is
          the best (minimum) field score.
    Returns: MatchResult, or None when no field was accepted.
    """
    if not field_matches:
        return None
    return MatchResult(
        ref=record.ref,
        document=record.document,
        score=min(m.score for m in field_matches),
        position=record.position,
        matched_fields=frozenset(m.key for m in field_matches),
        matches=tuple(field_matches),
    )


# ─────────────────────────────────────────────────────────────────────────────
# 3) Ranking
# ─────────────────────────────────────────────────────────────────────────────

def rank(
    results: Iterable[MatchResult],
    options: SearchOptions,
    *,
    limit: int | None = None,
) -> list[MatchResult]:
    """
    Does: Dedupe by ref (best score wins, earliest position on ties), order
          best-first with ties in corpus order when sort_results (else corpus
          order), then truncate to `limit` (falls back to options.limit; 0 = all).
    Returns: New list; truncation never reorders.
    """
    best: dict[Hashable, MatchResult] = {}
    for r in results:
        kept = best.get(r.ref)
        if kept is None or (r.score, r.position) < (kept.score, kept.position):
            best[r.ref] = r

    if options.sort_results:
        ordered = sorted(best.values(), key=lambda r: (r.score, r.position))
    else:
        ordered = sorted(best.values(), key=lambda r: r.position)

    cap = options.limit if limit is None else limit
    if cap and cap > 0:
        return ordered[:cap]
    return ordered
