"""
Shared pytest fixtures for the Smart Recommender test suite.

Provides:
  - ``now``: a fixed UTC reference instant.
  - ``make_event``: factory for ``InteractionEvent`` with sensible defaults.
  - ``sample_events``: the five-event history used across scorer/ranker tests
    (item1: viewed+liked, item2: viewed+dismissed, item3: liked).
  - ``random_interactions``: seeded generator of mock histories (the random
    sample data a demo UI would show; kept out of production code).
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from smart_recommender.models.interaction import InteractionEvent
from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

NOW = datetime(2025, 4, 6, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant for decay and timestamp tests."""
    return NOW


@pytest.fixture
def make_event() -> Callable[..., InteractionEvent]:
    """Return a factory: ``make_event("item1", InteractionKind.LIKED, days_ago=7)``."""

    def _make(
        item_id: str = "item1",
        kind: InteractionKind = InteractionKind.VIEWED,
        days_ago: float = 0.0,
        timestamp: datetime | None = None,
    ) -> InteractionEvent:
        ts = timestamp if timestamp is not None else NOW - timedelta(days=days_ago)
        return InteractionEvent(item_id=item_id, kind=kind, timestamp=ts)

    return _make


@pytest.fixture
def sample_events(make_event) -> list[InteractionEvent]:
    """Five interactions over three items, all stamped at ``NOW``."""
    return [
        make_event("item1", InteractionKind.VIEWED),
        make_event("item1", InteractionKind.LIKED),
        make_event("item2", InteractionKind.VIEWED),
        make_event("item2", InteractionKind.DISMISSED),
        make_event("item3", InteractionKind.LIKED),
    ]


@pytest.fixture
def random_interactions() -> Callable[..., list[InteractionEvent]]:
    """Return a seeded generator of mock interaction histories.

    Defaults mirror a demo feed: 30 events over item1..item5, kinds drawn from
    viewed/liked/dismissed, timestamps spread over the past week.
    """

    def _generate(
        count: int = 30,
        items: tuple[str, ...] = ("item1", "item2", "item3", "item4", "item5"),
        seed: int = 42,
    ) -> list[InteractionEvent]:
        rng = random.Random(seed)
        kinds = (InteractionKind.VIEWED, InteractionKind.LIKED, InteractionKind.DISMISSED)
        return [
            InteractionEvent(
                item_id=rng.choice(items),
                kind=rng.choice(kinds),
                timestamp=NOW - timedelta(seconds=rng.uniform(0, 7 * 86400)),
            )
            for _ in range(count)
        ]

    return _generate
