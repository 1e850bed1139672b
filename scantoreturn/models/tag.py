"""Tag records and activation requests."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TagStatus(str, Enum):
    """Binding state of a tag. Values match the remote record service."""
    NEW = "new"
    ACTIVE = "found"


@dataclass
class TagRecord:
    """One physical tag: NEW (unbound) or ACTIVE (bound to item + contact)."""
    tag_id: str
    status: TagStatus = TagStatus.NEW
    item_name: Optional[str] = None
    owner_contact: Optional[str] = None
    contact_uri: Optional[str] = None  # may be a masked link supplied by the remote service

    @property
    def is_active(self) -> bool:
        return self.status is TagStatus.ACTIVE


@dataclass
class ActivationRequest:
    """Owner input for binding a tag; owner_contact may still contain formatting."""
    tag_id: str
    item_name: str
    owner_contact: str


def new_record(tag_id: str) -> TagRecord:
    """Unbound record for tag_id (what an unknown tag resolves to)."""
    return TagRecord(tag_id=tag_id, status=TagStatus.NEW)
