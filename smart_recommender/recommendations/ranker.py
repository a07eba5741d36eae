"""
Recommendation ranker: orders a score map and truncates it.

Ordering rule (used everywhere a ranking is produced)
------------------------------------------------------
    primary   : score descending
    secondary : item_id ascending   (deterministic tie-break)

Usage flow
----------
1. top_items(scores, limit)
   -> list[item_id]                 (top-N ids)

2. rank_recommendations(scores)
   -> list[Recommendation]          (full ranked snapshot, fresh ids)

3. apply_filters(scores, threshold, max_results)
   -> list[item_id]                 (threshold, then top-N)
"""

from __future__ import annotations

from collections.abc import Mapping

from smart_recommender.models.recommendation import Recommendation
from smart_recommender.recommendations.scorer import filter_above_threshold


def _ranking_key(entry: tuple[str, float]) -> tuple[float, str]:
    item_id, score = entry
    return (-score, item_id)


def ranked_entries(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    """Return ``(item_id, score)`` pairs in ranking order."""
    return sorted(scores.items(), key=_ranking_key)


def top_items(scores: Mapping[str, float], limit: int = 10) -> list[str]:
    """Return the ``limit`` best item ids.

    Args:
        scores: Score map.
        limit:  Max ids to return.  ``<= 0`` yields ``[]``; a limit beyond the
                number of entries returns every entry (no padding).

    Returns:
        Item ids, score descending, ties by item_id ascending.
    """
    if limit <= 0:
        return []
    return [item_id for item_id, _ in ranked_entries(scores)[:limit]]


def rank_recommendations(scores: Mapping[str, float]) -> list[Recommendation]:
    """Convert a score map into an ordered list of ``Recommendation`` objects.

    Each call generates new ``Recommendation.id`` values; the ids identify
    rows of this snapshot only.
    """
    return [
        Recommendation(item_id=item_id, score=score)
        for item_id, score in ranked_entries(scores)
    ]


def apply_filters(
    scores:      Mapping[str, float],
    threshold:   float,
    max_results: int,
) -> list[str]:
    """Keep items scoring ``>= threshold`` and return the best ``max_results``.

    ``threshold`` and ``max_results`` come from the caller (config or UI
    controls); nothing here has built-in limits.
    """
    return top_items(filter_above_threshold(scores, threshold), max_results)
