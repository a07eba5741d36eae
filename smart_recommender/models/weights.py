"""
Weight table: per-kind signed contribution used by the scorer.

The table is built once and is read-only afterwards.  Lookups for a kind
that has no entry return ``0.0`` rather than raising, so the scorer stays
total when new ``InteractionKind`` members are introduced.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

DEFAULT_WEIGHTS: Mapping[InteractionKind, float] = MappingProxyType({
    InteractionKind.VIEWED:     1.0,
    InteractionKind.LIKED:      2.0,
    InteractionKind.DISMISSED: -1.0,
})


@dataclass(frozen=True, eq=False)
class WeightTable(Mapping[InteractionKind, float]):
    """Immutable mapping ``InteractionKind -> weight``.

    Keys may be given as ``InteractionKind`` members or their string values;
    values must be finite numbers.

    Example::

        table = WeightTable({"viewed": 0.5, "liked": 5.0})
        table.weight_for(InteractionKind.SHARED)   # 0.0
    """

    weights: Mapping[InteractionKind, float] = field(
        default_factory=lambda: dict(DEFAULT_WEIGHTS)
    )

    def __post_init__(self) -> None:
        frozen: dict[InteractionKind, float] = {}
        for raw_kind, raw_weight in self.weights.items():
            kind = InteractionKind(raw_kind)
            weight = float(raw_weight)
            if not math.isfinite(weight):
                raise ValueError(f"Weight for '{kind}' must be finite, got {raw_weight}.")
            frozen[kind] = weight
        object.__setattr__(self, "weights", MappingProxyType(frozen))

    @classmethod
    def default(cls) -> "WeightTable":
        """Return the stock table: viewed 1.0, liked 2.0, dismissed -1.0."""
        return cls(dict(DEFAULT_WEIGHTS))

    def weight_for(self, kind: InteractionKind | str) -> float:
        """Weight of ``kind``, or ``0.0`` when the table has no entry for it."""
        try:
            return self.weights.get(InteractionKind(kind), 0.0)
        except ValueError:
            return 0.0

    def __getitem__(self, kind: InteractionKind) -> float:
        return self.weights[kind]

    def __iter__(self) -> Iterator[InteractionKind]:
        return iter(self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.weights.items())))
