"""
Red tag submission records.

Provides the record schema, submission validation, and the append-only
record store that analytics and export read snapshots from.
"""

from .schema import (
    SubmissionRecord,
    SubmissionError,
    REQUIRED_FIELDS,
    WIRE_FIELDS,
    validate_submission,
    default_date,
)
from .store import RecordStore

__all__ = [
    'SubmissionRecord',
    'SubmissionError',
    'REQUIRED_FIELDS',
    'WIRE_FIELDS',
    'validate_submission',
    'default_date',
    'RecordStore',
]
