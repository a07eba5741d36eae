"""
Interaction persistence — save/load the interaction history as a flat JSON
array on disk.

File layout (``config.storage.interactions_file``, default
``data/interactions.json``)::

    [
      {
        "id": "6f1c6f7e-0d0a-4c1e-9a55-2b7b1c0f4d1e",
        "itemID": "item1",
        "timestamp": "2025-04-06T12:00:00Z",
        "interactionType": "liked"
      },
      ...
    ]

Records are written in the order given and read back in file order.

Failure policy
--------------
Persistence is best-effort.  ``save()`` never raises: I/O or encoding errors
are logged at WARNING and the call becomes a no-op.  ``load()`` never raises
either: a missing file yields ``[]`` silently; an unreadable or corrupt file
(bad JSON, not an array, any invalid record) yields ``[]`` with a WARNING.
``append()`` never writes over a file it could not read.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from smart_recommender.models.interaction import InteractionEvent
from smart_recommender.utils.time_utils import format_utc, parse_utc

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("id", "itemID", "timestamp", "interactionType")


def event_to_record(event: InteractionEvent) -> dict[str, str]:
    """Encode one event as a JSON-ready record dict."""
    return {
        "id":              str(event.id),
        "itemID":          event.item_id,
        "timestamp":       format_utc(event.timestamp),
        "interactionType": event.kind.value,
    }


def record_to_event(record: dict[str, Any]) -> InteractionEvent:
    """Decode one record dict into a validated ``InteractionEvent``.

    Raises:
        ValueError: If a field is missing or has a bad value.
        pydantic.ValidationError: On model-level validation failure.
    """
    if not isinstance(record, dict):
        raise ValueError(f"Record must be an object, got {type(record).__name__}.")
    missing = [name for name in RECORD_FIELDS if name not in record]
    if missing:
        raise ValueError(f"Record missing fields: {missing}")

    return InteractionEvent(
        id=record["id"],
        item_id=record["itemID"],
        timestamp=parse_utc(str(record["timestamp"])),
        kind=record["interactionType"],
    )


class InteractionStore:
    """File-backed store for the interaction history.

    One instance per file; build it from config and pass it to whoever
    assembles the engine::

        store = InteractionStore(Path(config.storage.interactions_file))
        engine.ingest(store.load())

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def save(self, events: Iterable[InteractionEvent]) -> None:
        """Overwrite the file with ``events`` (best-effort; never raises)."""
        try:
            records = [event_to_record(ev) for ev in events]
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(records, indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Failed to save interactions to %s: %s", self.path, exc)
            return

        logger.debug("Interactions saved: %s (%d records)", self.path, len(records))

    def load(self) -> list[InteractionEvent]:
        """Read every stored event, or ``[]`` if the file is missing or corrupt."""
        events = self._read()
        return events if events is not None else []

    def _read(self) -> list[InteractionEvent] | None:
        """Stored events; ``[]`` for a missing file, ``None`` if unreadable or corrupt."""
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read interactions from %s: %s", self.path, exc)
            return None

        if not isinstance(raw, list):
            logger.warning(
                "Interactions file %s must contain a JSON array; ignoring it.", self.path
            )
            return None

        try:
            events = [record_to_event(rec) for rec in raw]
        except (ValueError, ValidationError) as exc:
            logger.warning("Corrupt interactions file %s: %s", self.path, exc)
            return None

        logger.debug("Interactions loaded: %s (%d records)", self.path, len(events))
        return events

    def append(self, events: Iterable[InteractionEvent]) -> list[InteractionEvent]:
        """Load the stored history, add ``events`` and save the combined list.

        A present but unreadable or corrupt file is left untouched: nothing is
        written and only ``events`` are returned.

        Returns:
            The combined history, stored events first.
        """
        stored = self._read()
        if stored is None:
            logger.warning(
                "Not appending to unreadable interactions file %s; it was left as-is.",
                self.path,
            )
            return list(events)

        combined = stored + list(events)
        self.save(combined)
        return combined
