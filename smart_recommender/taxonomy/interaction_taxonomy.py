"""
Interaction taxonomy for user-item events.

``InteractionKind`` is the *what* of every event: which action did the user
take on an item?  The member value is the serialized form written to the
interactions file (``"viewed"``, ``"liked"``, ...).

New kinds can be appended here without touching the scorer; any kind that
has no entry in a ``WeightTable`` simply contributes zero weight.

Usage example::

    from smart_recommender.taxonomy.interaction_taxonomy import InteractionKind

    kind = InteractionKind.LIKED

This module has NO imports from any other ``smart_recommender`` package.
"""

from enum import StrEnum


class InteractionKind(StrEnum):
    """Category of user action recorded against an item."""

    VIEWED = "viewed"
    """Item was opened or displayed in detail."""

    LIKED = "liked"
    """Explicit positive signal."""

    DISMISSED = "dismissed"
    """Explicit negative signal; the user asked not to see the item."""

    SHARED = "shared"
    """Item was shared onward.  No default weight."""

    PURCHASED = "purchased"
    """Item was bought.  No default weight."""
