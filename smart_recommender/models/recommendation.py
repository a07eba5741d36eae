"""
Recommendation output model.

A ``Recommendation`` is derived from a score map every time the engine
recomputes.  It is never persisted by the engine itself; the ``id`` is a
fresh UUID per recomputation so list views can key rows uniquely.
"""

from __future__ import annotations

import math
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Recommendation(BaseModel):
    """One ranked item with its accumulated score.

    Attributes:
        id: Row identifier, regenerated on each recomputation.
        item_id: Recommended item.
        score: Accumulated (possibly negative) score.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    item_id: str
    score: float

    @field_validator("score")
    @classmethod
    def validate_score_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"score must be finite, got {v}.")
        return v
