"""Data models for tags, remote outcomes, and lifecycle views."""
from scantoreturn.models.lifecycle import TagView
from scantoreturn.models.outcomes import (
    Found,
    LookupOutcome,
    Malformed,
    NotFound,
    Submitted,
    TimedOut,
    Unreachable,
    WriteOutcome,
)
from scantoreturn.models.tag import ActivationRequest, TagRecord, TagStatus, new_record

__all__ = [
    "ActivationRequest",
    "Found",
    "LookupOutcome",
    "Malformed",
    "NotFound",
    "Submitted",
    "TagRecord",
    "TagStatus",
    "TagView",
    "TimedOut",
    "Unreachable",
    "WriteOutcome",
    "new_record",
]
