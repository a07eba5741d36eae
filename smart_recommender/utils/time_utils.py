"""
Time utilities for interaction scoring.

Key concepts:
  - All instants are timezone-aware UTC.  Naive datetimes are assumed UTC.
  - Day differences are *signed real* numbers: 36 hours is 1.5 days, and an
    instant after the reference yields a negative value.
"""

from __future__ import annotations

from datetime import datetime, timezone

SECONDS_PER_DAY: float = 24 * 60 * 60


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive input is taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_between(earlier: datetime, reference: datetime) -> float:
    """Return the signed number of days from ``earlier`` to ``reference``.

    Positive: ``earlier`` is before ``reference``.
    Zero: same instant.
    Negative: ``earlier`` is actually after ``reference``.

    Args:
        earlier: The event instant.
        reference: The instant ages are measured against.

    Returns:
        ``(reference - earlier)`` expressed in fractional days.
    """
    delta = ensure_utc(reference) - ensure_utc(earlier)
    return delta.total_seconds() / SECONDS_PER_DAY


def format_utc(value: datetime) -> str:
    """Format an instant as ISO 8601 with a trailing ``Z``, e.g. ``2025-04-06T12:00:00Z``.

    Sub-second precision is kept when present so round-trips are exact.
    """
    text = ensure_utc(value).isoformat()
    return text.replace("+00:00", "Z")


def parse_utc(text: str) -> datetime:
    """Parse an ISO 8601 string (``Z`` or explicit offset) into aware UTC.

    Raises:
        ValueError: If ``text`` is not a valid ISO 8601 datetime.
    """
    return ensure_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
