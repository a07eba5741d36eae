"""
RecommendationEngine — owns the interaction history and republishes the
ranked recommendation list every time new events are ingested.

Recompute flow (``ingest``)
---------------------------
  1. Append the new events to the in-memory history (append-only).
  2. scores = scorer.analyze(history, weights)       (full recompute)
  3. recommendations = ranker.rank_recommendations(scores)
  4. Store the snapshot, notify every listener synchronously, return it.

No decay or threshold is applied here; callers layer ``analyze_with_decay``,
``filter_above_threshold`` and ``top_items`` on top when they need them.

Lifecycle: empty -> has-history.  The history only grows for the lifetime of
the engine instance and is never handed out as a mutable object.

Usage::

    engine = RecommendationEngine(weights=config.scoring.weight_table())
    unsubscribe = engine.subscribe(render)
    engine.ingest(store.load())
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from smart_recommender.models.interaction import InteractionEvent
from smart_recommender.models.recommendation import Recommendation
from smart_recommender.models.weights import WeightTable
from smart_recommender.recommendations.ranker import rank_recommendations
from smart_recommender.recommendations.scorer import ScoreMap, analyze

logger = logging.getLogger(__name__)

RecommendationListener = Callable[[list[Recommendation]], None]


class RecommendationEngine:
    """Accumulates interaction history and publishes ranked recommendations.

    Attributes:
        weights: The ``WeightTable`` used for every recomputation.
    """

    def __init__(self, weights: WeightTable | None = None) -> None:
        self.weights = weights if weights is not None else WeightTable.default()
        self._history: list[InteractionEvent] = []
        self._scores: ScoreMap = {}
        self._recommendations: list[Recommendation] = []
        self._listeners: list[RecommendationListener] = []

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def recommendations(self) -> list[Recommendation]:
        """The most recently published snapshot (a copy)."""
        return list(self._recommendations)

    @property
    def scores(self) -> ScoreMap:
        """Score map behind the current snapshot (a copy)."""
        return dict(self._scores)

    @property
    def history_size(self) -> int:
        return len(self._history)

    @property
    def has_history(self) -> bool:
        return bool(self._history)

    def history_snapshot(self) -> tuple[InteractionEvent, ...]:
        """Immutable copy of the history in ingestion order, for persistence."""
        return tuple(self._history)

    # ── Observers ─────────────────────────────────────────────────────────────

    def subscribe(self, listener: RecommendationListener) -> Callable[[], None]:
        """Register ``listener`` to be called with each new snapshot.

        Returns:
            A zero-argument function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Ingestion ─────────────────────────────────────────────────────────────

    def ingest(self, new_events: Iterable[InteractionEvent]) -> list[Recommendation]:
        """Append ``new_events`` to the history and recompute the ranking.

        Listeners are invoked in registration order after the snapshot is
        stored; an exception raised by a listener propagates to the caller.

        Returns:
            The new ranked recommendation list (score descending).
        """
        batch = list(new_events)
        self._history.extend(batch)

        self._scores = analyze(self._history, self.weights)
        self._recommendations = rank_recommendations(self._scores)
        logger.debug(
            "Recomputed recommendations | new=%d history=%d items=%d",
            len(batch), len(self._history), len(self._recommendations),
        )

        snapshot = self.recommendations
        for listener in list(self._listeners):
            listener(list(snapshot))
        return snapshot
