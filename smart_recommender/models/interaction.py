"""
Interaction event model: the only input to the scoring engine.

``InteractionEvent`` records one user action on one item at one instant.
Events are produced by an external source (UI, CLI, or the interactions
file) and are never mutated afterwards; the engine only reads them.

Timestamps are normalised to timezone-aware UTC so that day arithmetic in
decay scoring never mixes naive and aware datetimes.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind
from smart_recommender.utils.time_utils import ensure_utc, utcnow


class InteractionEvent(BaseModel):
    """A single user-item interaction.

    Attributes:
        id: Opaque identifier of this event (UUID4 by default).
        item_id: Identifier of the item acted upon, e.g. ``"item1"``.
        timestamp: When the interaction happened (UTC).
        kind: What the user did, from ``InteractionKind``.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    item_id: str
    timestamp: datetime = Field(default_factory=utcnow)
    kind: InteractionKind

    @field_validator("item_id")
    @classmethod
    def validate_item_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("item_id must not be empty.")
        return v.strip()

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp_utc(cls, v: datetime) -> datetime:
        """Treat naive datetimes as UTC; convert aware ones to UTC."""
        return ensure_utc(v)
