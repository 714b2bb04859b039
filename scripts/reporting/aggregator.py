"""
Data aggregation for red tag analytics.

Counts records per field value and ranks the results into top-N lists with
a deterministic tie-break, then combines them with the failure trend into a
single analysis result.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from records.schema import SubmissionRecord

from .trends import (
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_DAYS,
    INSUFFICIENT_TREND,
    TrendResult,
    classify_trend,
)


NO_DATA_NAME = "No data yet"

# Records whose grouped field is absent or empty are counted under this key
MISSING_KEY = "undefined"

DEFAULT_TOP_N = 5

Selector = Callable[[SubmissionRecord], Any]

DIMENSIONS: Dict[str, Selector] = {
    "part_number": lambda record: record.part_number,
    "asset": lambda record: record.removed_from,
    "mfc": lambda record: record.mfc,
    "reason": lambda record: record.reason_remove,
}


@dataclass(frozen=True)
class RankedItem:
    """One group in a ranked frequency list."""
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "count": self.count}


def no_data() -> List[RankedItem]:
    """Sentinel list used for every dimension of an empty snapshot."""
    return [RankedItem(NO_DATA_NAME, 0)]


def group_key(value: Any) -> str:
    """Turn a field value into a grouping key."""
    if value is None or value == "":
        return MISSING_KEY
    return str(value)


def compute_frequencies(
    records: Sequence[SubmissionRecord],
    selector: Selector,
) -> Dict[str, int]:
    """
    Count records per selected field value.

    Every record contributes exactly one count, so the counts always sum to
    ``len(records)``. Keys appear in order of first occurrence.

    Args:
        records: Record snapshot
        selector: Function returning the field value to group on

    Returns:
        Mapping of group key -> count
    """
    counts: Dict[str, int] = {}
    for record in records:
        key = group_key(selector(record))
        counts[key] = counts.get(key, 0) + 1
    return counts


def top_n(frequencies: Mapping[str, int], n: Optional[int] = None) -> List[RankedItem]:
    """
    Rank a frequency table by count, highest first.

    Ties are broken by the key's position in the table, i.e. by first
    occurrence in the snapshot the table was computed from.

    Args:
        frequencies: Mapping of group key -> count
        n: Maximum number of entries to return (None = all)

    Returns:
        List of RankedItem
    """
    ranked = sorted(
        enumerate(frequencies.items()),
        key=lambda entry: (-entry[1][1], entry[0]),
    )
    if n is not None:
        ranked = ranked[:max(n, 0)]
    return [RankedItem(name, count) for _, (name, count) in ranked]


@dataclass(frozen=True)
class AnalysisResult:
    """Ranked lists and trend for one record snapshot."""
    top_parts: List[RankedItem]
    top_assets: List[RankedItem]
    mfc_stats: List[RankedItem]
    top_reasons: List[RankedItem]
    trends: TrendResult
    record_count: int
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "generated_at": self.generated_at,
            "record_count": self.record_count,
            "top_parts": [item.to_dict() for item in self.top_parts],
            "top_assets": [item.to_dict() for item in self.top_assets],
            "mfc_stats": [item.to_dict() for item in self.mfc_stats],
            "top_reasons": [item.to_dict() for item in self.top_reasons],
            "trends": self.trends.to_dict(),
        }


class DataAggregator:
    """Computes the analytics summary for a record snapshot."""

    def __init__(
        self,
        top_n: int = DEFAULT_TOP_N,
        window_days: int = DEFAULT_WINDOW_DAYS,
        threshold: float = DEFAULT_THRESHOLD,
    ):
        """
        Initialize aggregator.

        Args:
            top_n: Length of the part, asset and reason lists
            window_days: Recency window for the trend
            threshold: Recent share above which the trend is increasing
        """
        self.top_n = top_n
        self.window_days = window_days
        self.threshold = threshold

    def frequencies(self, records: Sequence[SubmissionRecord], dimension: str) -> Dict[str, int]:
        """Frequency table for one of the tracked DIMENSIONS."""
        try:
            selector = DIMENSIONS[dimension]
        except KeyError:
            raise ValueError(
                f"Unknown dimension {dimension!r}; expected one of {', '.join(DIMENSIONS)}"
            ) from None
        return compute_frequencies(records, selector)

    def analyze(
        self,
        records: Sequence[SubmissionRecord],
        now: Union[datetime, date, None] = None,
    ) -> AnalysisResult:
        """
        Analyze a record snapshot.

        Args:
            records: Record snapshot, in creation order
            now: Evaluation time for the trend (defaults to now, UTC)

        Returns:
            AnalysisResult with sentinel values when the snapshot is empty
        """
        records = tuple(records)
        generated_at = (now if isinstance(now, datetime) else datetime.now(timezone.utc)).isoformat()

        if not records:
            return AnalysisResult(
                top_parts=no_data(),
                top_assets=no_data(),
                mfc_stats=no_data(),
                top_reasons=no_data(),
                trends=INSUFFICIENT_TREND,
                record_count=0,
                generated_at=generated_at,
            )

        return AnalysisResult(
            top_parts=top_n(self.frequencies(records, "part_number"), self.top_n),
            top_assets=top_n(self.frequencies(records, "asset"), self.top_n),
            mfc_stats=top_n(self.frequencies(records, "mfc")),
            top_reasons=top_n(self.frequencies(records, "reason"), self.top_n),
            trends=classify_trend(
                records,
                now=now,
                window_days=self.window_days,
                threshold=self.threshold,
            ),
            record_count=len(records),
            generated_at=generated_at,
        )


def analyze(
    records: Sequence[SubmissionRecord],
    now: Union[datetime, date, None] = None,
) -> AnalysisResult:
    """Analyze a snapshot with the default limits."""
    return DataAggregator().analyze(records, now=now)
