"""
Failure trend classification for red tag records.

Compares the number of removals in the recent window against the full
history and labels the failure rate as increasing or stable. This is a fixed
threshold heuristic over exact counts, not a statistical test.
"""

import re
from dataclasses import dataclass, asdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, Optional, Sequence, Union

from records.schema import SubmissionRecord


INCREASING = "Increasing failure rate"
STABLE = "Stable failure rate"
INSUFFICIENT_DATA = "Insufficient data"

DEFAULT_WINDOW_DAYS = 30
DEFAULT_THRESHOLD = 0.6


@dataclass(frozen=True)
class TrendResult:
    """Trend label with the counts it was derived from."""
    trend: str
    recent_count: int
    total_count: int

    @property
    def is_insufficient(self) -> bool:
        return self.trend == INSUFFICIENT_DATA

    @property
    def is_increasing(self) -> bool:
        return self.trend == INCREASING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


INSUFFICIENT_TREND = TrendResult(INSUFFICIENT_DATA, 0, 0)


_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}[T ]")


def _as_utc(value: datetime) -> datetime:
    # Naive values are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_record_instant(value: Any) -> Optional[datetime]:
    """
    Parse a record's removal date as an aware UTC datetime.

    Accepts ``YYYY-MM-DD`` strings (midnight UTC), extended ISO 8601
    timestamps (with ``Z`` or an offset) and date/datetime objects. Compact
    and week-date forms such as ``20240228`` or ``2024-W09-3`` are rejected.

    Returns:
        The instant, or None if the value is missing or malformed
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        if _DATE_ONLY.fullmatch(text):
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        if _TIMESTAMP.match(text):
            return _as_utc(datetime.fromisoformat(text.replace('Z', '+00:00')))
    except ValueError:
        return None
    return None


def parse_record_date(value: Any) -> Optional[date]:
    """Parse a record's removal date to its UTC calendar date, or None."""
    instant = parse_record_instant(value)
    return instant.date() if instant is not None else None


def classify_trend(
    records: Sequence[SubmissionRecord],
    now: Union[datetime, date, None] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    threshold: float = DEFAULT_THRESHOLD,
) -> TrendResult:
    """
    Classify whether recent removals indicate an increasing failure rate.

    A record is recent when its effective date, read as midnight UTC, is at
    or after the instant ``window_days`` before ``now``. A full timestamp is
    compared as is. Records with a missing or malformed date are never recent
    but still count toward the total.

    Args:
        records: Record snapshot
        now: Evaluation time (defaults to the current UTC time; a plain date
            means midnight UTC, a naive datetime is taken as UTC)
        window_days: Length of the recency window in days
        threshold: Share of all records that must be recent, exclusive

    Returns:
        TrendResult; the insufficient-data sentinel for an empty snapshot
    """
    total_count = len(records)
    if total_count == 0:
        return INSUFFICIENT_TREND

    evaluated_at = parse_record_instant(now) if now is not None else datetime.now(timezone.utc)
    cutoff = evaluated_at - timedelta(days=window_days)

    recent_count = 0
    for record in records:
        instant = parse_record_instant(record.effective_date)
        if instant is not None and instant >= cutoff:
            recent_count += 1

    trend = INCREASING if recent_count > total_count * threshold else STABLE
    return TrendResult(trend, recent_count, total_count)
