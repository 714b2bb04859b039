"""
Flat-file export of red tag records.

Serializes a record snapshot to comma-delimited text with a fixed header.
The escaping is deliberately narrow for compatibility with existing exports:
commas inside Comments become semicolons, and nothing else is quoted or
escaped.
"""

from datetime import date, datetime, timezone
from typing import Any, List, Optional, Sequence, Union

from records.schema import SubmissionRecord


HEADERS = [
    'ID', 'MFC', 'Date', 'Tagged By', 'Item Type',
    'Part Number', 'Asset SN', 'Service Call ID', 'Reason', 'Comments',
]

DEFAULT_PREFIX = "red-tag-export"


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def export_row(record: SubmissionRecord) -> List[str]:
    """Column values for one record, in HEADERS order."""
    return [
        _cell(record.id),
        _cell(record.mfc),
        _cell(record.effective_date),
        _cell(record.tagged_by),
        _cell(record.item_type),
        _cell(record.part_number),
        _cell(record.removed_from),
        _cell(record.service_call_id),
        _cell(record.reason_remove),
        _cell(record.comments).replace(',', ';'),
    ]


def export_csv_text(records: Sequence[SubmissionRecord]) -> str:
    """
    Render the snapshot as delimited text.

    Args:
        records: Record snapshot, in creation order

    Returns:
        Header line followed by one line per record, joined by newlines
    """
    lines = [','.join(HEADERS)]
    lines.extend(','.join(export_row(record)) for record in records)
    return '\n'.join(lines)


def export_csv(records: Sequence[SubmissionRecord]) -> bytes:
    """Render the snapshot as UTF-8 encoded delimited text."""
    return export_csv_text(records).encode('utf-8')


def export_filename(
    generated_at: Union[datetime, date, None] = None,
    prefix: Optional[str] = None,
) -> str:
    """
    Suggested file name for an export.

    Args:
        generated_at: Generation time (defaults to now, UTC)
        prefix: File name prefix (defaults to "red-tag-export")

    Returns:
        File name like ``red-tag-export-2024-02-15.csv``
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    if isinstance(generated_at, datetime) and generated_at.tzinfo:
        generated_at = generated_at.astimezone(timezone.utc)
    day = generated_at.date() if isinstance(generated_at, datetime) else generated_at
    return f"{prefix or DEFAULT_PREFIX}-{day.isoformat()}.csv"
