"""
Interaction scoring: converts a batch of InteractionEvents into a score map
(item_id -> accumulated score).

Score formula
-------------
    score(item) = sum( weight(kind) for each event on item )

With time decay (``analyze_with_decay``)::

    score(item) = sum( weight(kind) * decay_factor ** days_ago )

    days_ago = (reference_time - event.timestamp) in fractional days

``days_ago`` is signed: events stamped after ``reference_time`` get a
negative exponent and are amplified when ``decay_factor < 1``.  This is
kept as-is rather than clamped to zero.

Post-processing
---------------
normalize              : min-max scale to [0, 1]; a flat map becomes all 0.5.
filter_above_threshold : keep entries with score >= threshold (inclusive).

All functions are pure: no I/O, no mutation of their inputs.  Every score
map is recomputed from the full event list; there is no incremental state.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime

from smart_recommender.models.interaction import InteractionEvent
from smart_recommender.models.weights import WeightTable
from smart_recommender.utils.time_utils import days_between, utcnow

ScoreMap = dict[str, float]

DEFAULT_DECAY_FACTOR: float = 0.9


def analyze(
    events:  Iterable[InteractionEvent],
    weights: WeightTable | None = None,
) -> ScoreMap:
    """Accumulate per-item scores from interaction weights.

    Kinds missing from ``weights`` contribute ``0.0``; the item still gets an
    entry so every item seen in ``events`` is present in the result.

    Args:
        events:  Interaction history (any order; the result is order-independent).
        weights: Per-kind weights.  ``None`` uses ``WeightTable.default()``.

    Returns:
        Score map; empty when ``events`` is empty.
    """
    table = weights if weights is not None else WeightTable.default()

    scores: defaultdict[str, float] = defaultdict(float)
    for event in events:
        scores[event.item_id] += table.weight_for(event.kind)
    return dict(scores)


def analyze_with_decay(
    events:         Iterable[InteractionEvent],
    weights:        WeightTable | None = None,
    decay_factor:   float = DEFAULT_DECAY_FACTOR,
    reference_time: datetime | None = None,
) -> ScoreMap:
    """Accumulate per-item scores with exponential per-day decay.

    Each contribution is ``weight * decay_factor ** days_ago``.  A factor in
    (0, 1) attenuates older events; a factor >= 1 is accepted and amplifies
    them.

    Args:
        events:         Interaction history.
        weights:        Per-kind weights.  ``None`` uses the defaults.
        decay_factor:   Per-day multiplier; must be a finite number > 0.
        reference_time: Instant ages are measured from.  ``None`` = now (UTC).

    Returns:
        Score map; empty when ``events`` is empty.

    Raises:
        ValueError: If ``decay_factor`` is not a finite positive number, or if
            it overflows for an event far from ``reference_time``.
    """
    validate_decay_factor(decay_factor)
    table = weights if weights is not None else WeightTable.default()
    ref = reference_time if reference_time is not None else utcnow()

    scores: defaultdict[str, float] = defaultdict(float)
    for event in sorted(events, key=lambda e: e.timestamp):
        days_ago = days_between(event.timestamp, ref)
        try:
            factor = decay_factor ** days_ago
        except OverflowError:
            raise ValueError(
                f"decay_factor {decay_factor} overflows for an event "
                f"{days_ago:.1f} days from the reference time."
            ) from None
        scores[event.item_id] += table.weight_for(event.kind) * factor
    return dict(scores)


def normalize(scores: Mapping[str, float]) -> ScoreMap:
    """Min-max scale a score map into [0, 1].

    When every score is equal (including a single entry) each value maps to
    exactly ``0.5``.  The input is left untouched.

    Returns:
        New score map with the same keys; empty for empty input.
    """
    if not scores:
        return {}

    lo = min(scores.values())
    hi = max(scores.values())
    span = hi - lo
    if span == 0:
        return {item_id: 0.5 for item_id in scores}
    return {item_id: (score - lo) / span for item_id, score in scores.items()}


def filter_above_threshold(
    scores:    Mapping[str, float],
    threshold: float,
) -> ScoreMap:
    """Keep entries whose score is ``>= threshold`` (inclusive)."""
    return {item_id: score for item_id, score in scores.items() if score >= threshold}


def validate_decay_factor(decay_factor: float) -> float:
    """Return ``decay_factor`` unchanged, or raise if it is not finite and > 0."""
    if not math.isfinite(decay_factor) or decay_factor <= 0:
        raise ValueError(f"decay_factor must be a finite number > 0, got {decay_factor}.")
    return decay_factor
