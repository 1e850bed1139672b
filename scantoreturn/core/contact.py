"""Owner contact normalization and messaging deep links."""
import re
import urllib.parse
from typing import Optional

from scantoreturn.config import MESSAGING_BASE
from scantoreturn.models.tag import TagRecord

_NON_DIGITS = re.compile(r"\D")


def normalize_contact(raw: Optional[str]) -> str:
    """Strip everything but digits: '+1 (555) 123-4567' -> '15551234567'."""
    return _NON_DIGITS.sub("", raw or "")


def build_contact_uri(contact: str, base: str = MESSAGING_BASE) -> str:
    """Deep link for a raw contact, e.g. https://wa.me/15551234567."""
    return f"{base.rstrip('/')}/{normalize_contact(contact)}"


def default_found_message(item_name: Optional[str]) -> str:
    return f"Hi, I found your {item_name or 'item'}. How can I return it?"


def contact_link(record: TagRecord, message: str, base: str = MESSAGING_BASE) -> Optional[str]:
    """Link the finder opens to message the owner, with message pre-filled.

    Prefers contact_uri (which the remote service may have masked); falls back
    to building one from owner_contact. None for tags without a contact.
    """
    link = record.contact_uri
    if not link and record.owner_contact:
        link = build_contact_uri(record.owner_contact, base)
    if not link:
        return None
    separator = "&" if "?" in link else "?"
    return f"{link}{separator}text={urllib.parse.quote(message, safe='')}"
