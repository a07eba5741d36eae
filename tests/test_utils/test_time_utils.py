"""Tests for smart_recommender.utils.time_utils."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from smart_recommender.utils.time_utils import (
    days_between,
    ensure_utc,
    format_utc,
    parse_utc,
    utcnow,
)

_REF = datetime(2025, 4, 6, 12, 0, 0, tzinfo=timezone.utc)


def test_utcnow_is_aware() -> None:
    """utcnow() carries UTC tzinfo."""
    assert utcnow().tzinfo == timezone.utc


def test_ensure_utc_naive_is_taken_as_utc() -> None:
    """Naive datetimes get UTC attached without shifting."""
    naive = datetime(2025, 4, 6, 12, 0, 0)
    assert ensure_utc(naive) == _REF


def test_ensure_utc_converts_offsets() -> None:
    """Offset-aware datetimes are converted to UTC."""
    plus_two = datetime(2025, 4, 6, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    result = ensure_utc(plus_two)
    assert result == _REF
    assert result.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(days=7), 7.0),
        (timedelta(hours=36), 1.5),
        (timedelta(0), 0.0),
        (timedelta(days=-2), -2.0),
    ],
)
def test_days_between_is_signed_and_fractional(delta: timedelta, expected: float) -> None:
    """reference - earlier, in fractional days; future instants are negative."""
    assert days_between(_REF - delta, _REF) == pytest.approx(expected)


def test_format_utc_uses_z_suffix() -> None:
    """UTC offset is written as Z."""
    assert format_utc(_REF) == "2025-04-06T12:00:00Z"


def test_format_utc_keeps_microseconds() -> None:
    """Sub-second precision is preserved."""
    assert format_utc(_REF.replace(microsecond=250)) == "2025-04-06T12:00:00.000250Z"


def test_parse_utc_accepts_z_and_offsets() -> None:
    """Both Z and explicit offsets parse to the same instant."""
    assert parse_utc("2025-04-06T12:00:00Z") == _REF
    assert parse_utc("2025-04-06T13:00:00+01:00") == _REF


def test_parse_utc_rejects_garbage() -> None:
    """Invalid text raises ValueError."""
    with pytest.raises(ValueError):
        parse_utc("not a date")
