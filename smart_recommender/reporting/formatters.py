"""
ASCII terminal formatters for the CLI.

All formatters take ranked ids / score maps and return plain multi-line
strings suitable for ``typer.echo()``.  They never compute scores
themselves; ordering comes from the ranker.

Score bands
-----------
Each row carries a band label mirroring the dashboard's colour badge::

  high      score >= high_cutoff (default 3.0)    green
  neutral   0 <= score < high_cutoff               blue
  negative  score < 0                              red
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal

from smart_recommender.recommendations.ranker import ranked_entries

ScoreBand = Literal["high", "neutral", "negative"]

BAND_COLOURS: dict[str, str] = {
    "high":     "green",
    "neutral":  "blue",
    "negative": "red",
}


def score_band(score: float, high_cutoff: float = 3.0) -> ScoreBand:
    """Classify a score into its display band."""
    if score >= high_cutoff:
        return "high"
    if score >= 0:
        return "neutral"
    return "negative"


def format_recommendation_table(
    item_ids:    Sequence[str],
    scores:      Mapping[str, float],
    high_cutoff: float = 3.0,
) -> str:
    """Format ranked item ids as an ASCII table::

        Rank  Item                      Score  Band
        --------------------------------------------
           1  item4                      5.00  high
           2  item1                      3.00  high

    Ids missing from ``scores`` are shown with score 0.00.

    Args:
        item_ids:    Ids in display order (already ranked/filtered).
        scores:      Score map used to look up each id's score.
        high_cutoff: Lower bound of the "high" band.

    Returns:
        Multi-line string; a one-line notice when ``item_ids`` is empty.
    """
    if not item_ids:
        return "  No recommendations match the current filters."

    width = max(24, max(len(i) for i in item_ids))
    header = f"  {'Rank':>4}  {'Item':<{width}}  {'Score':>7}  Band"
    lines = [header, "  " + "-" * (len(header) - 2)]
    for rank, item_id in enumerate(item_ids, start=1):
        score = scores.get(item_id, 0.0)
        lines.append(
            f"  {rank:>4}  {item_id:<{width}}  {score:>7.2f}  "
            f"{score_band(score, high_cutoff)}"
        )
    return "\n".join(lines)


def format_score_map(scores: Mapping[str, float], precision: int = 3) -> str:
    """Format a whole score map, one ``item: score`` per line in ranking order."""
    if not scores:
        return "  (no scores)"

    width = max(len(i) for i in scores)
    return "\n".join(
        f"  {item_id:<{width}}  {score:>10.{precision}f}"
        for item_id, score in ranked_entries(scores)
    )
