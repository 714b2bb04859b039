"""
Record schema for red tag submissions.

Defines the immutable SubmissionRecord dataclass, the mapping between its
attributes and the camelCase field names used by the submission form and the
records log, and required-field validation for new submissions.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


# Wire name -> attribute name, in form order
WIRE_FIELDS: Dict[str, str] = {
    "id": "id",
    "mfc": "mfc",
    "removalDate": "removal_date",
    "date": "date",
    "taggedBy": "tagged_by",
    "itemType": "item_type",
    "partNumber": "part_number",
    "removedFrom": "removed_from",
    "serviceCallId": "service_call_id",
    "reasonRemove": "reason_remove",
    "comments": "comments",
    "attachedFiles": "attached_files",
    "timestamp": "timestamp",
}

REQUIRED_FIELDS: Tuple[str, ...] = (
    "mfc",
    "removalDate",
    "taggedBy",
    "itemType",
    "partNumber",
    "removedFrom",
    "reasonRemove",
)


class SubmissionError(ValueError):
    """Raised when a submission is missing required fields."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Please fill in all required fields: " + ", ".join(self.missing_fields)
        )


def _lookup(data: Mapping[str, Any], wire_name: str) -> Any:
    """Read a field by wire name, falling back to the attribute name."""
    if wire_name in data:
        return data[wire_name]
    return data.get(WIRE_FIELDS[wire_name])


def validate_submission(data: Mapping[str, Any]) -> List[str]:
    """
    Check a submission for missing required fields.

    Args:
        data: Submitted form values keyed by wire or attribute name

    Returns:
        Wire names of missing or empty required fields, in form order
    """
    return [name for name in REQUIRED_FIELDS if not _lookup(data, name)]


def default_date() -> str:
    """Today's date as the default removal date for a new form."""
    return date.today().isoformat()


@dataclass(frozen=True)
class SubmissionRecord:
    """One red tag submission. Never mutated after creation."""
    id: Any = None
    mfc: Optional[str] = None
    removal_date: Optional[str] = None
    date: Optional[str] = None  # legacy alias of removal_date
    tagged_by: Optional[str] = None
    item_type: Optional[str] = None
    part_number: Optional[str] = None
    removed_from: Optional[str] = None  # asset serial number
    service_call_id: Optional[str] = None
    reason_remove: Optional[str] = None
    comments: Optional[str] = None
    attached_files: Tuple[str, ...] = field(default_factory=tuple)
    timestamp: Optional[str] = None

    @property
    def effective_date(self) -> Optional[str]:
        """Removal date, falling back to the legacy ``date`` field."""
        return self.removal_date or self.date

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary keyed by wire name, omitting absent fields."""
        data = {}
        for wire_name, attr in WIRE_FIELDS.items():
            value = getattr(self, attr)
            if attr == "attached_files":
                data[wire_name] = list(value)
            elif value is not None:
                data[wire_name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SubmissionRecord":
        """
        Build a record from a stored or submitted dictionary.

        Accepts wire names (``partNumber``) and attribute names
        (``part_number``); unknown keys are ignored.
        """
        values = {}
        for wire_name, attr in WIRE_FIELDS.items():
            value = _lookup(data, wire_name)
            if attr == "attached_files":
                value = tuple(value or ())
            values[attr] = value
        return cls(**values)

    @classmethod
    def create(
        cls,
        data: Mapping[str, Any],
        attached_files: Iterable[str] = (),
        now: Optional[datetime] = None,
    ) -> "SubmissionRecord":
        """
        Create a new record from submitted form values.

        Assigns the id (epoch milliseconds) and creation timestamp.

        Args:
            data: Submitted form values
            attached_files: Names of files attached to the form
            now: Creation instant (defaults to the current UTC time)

        Returns:
            New SubmissionRecord

        Raises:
            SubmissionError: If any required field is missing
        """
        missing = validate_submission(data)
        if missing:
            raise SubmissionError(missing)

        if now is None:
            now = datetime.now(timezone.utc)

        return replace(
            cls.from_dict(data),
            id=int(now.timestamp() * 1000),
            timestamp=now.isoformat(),
            attached_files=tuple(attached_files),
        )
