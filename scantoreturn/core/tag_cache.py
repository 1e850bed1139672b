"""Persist and load tag records locally (JSON). Fallback store and mirror of remote writes."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from scantoreturn.config import SEED_COUNT, TAG_CACHE_KEY, TAG_CACHE_PATH
from scantoreturn.core.contact import build_contact_uri
from scantoreturn.models.tag import TagRecord, TagStatus, new_record

logger = logging.getLogger(__name__)

SAMPLE_TAG_ID = "ID_0001"
SAMPLE_ITEM_NAME = "Vintage Leather Wallet"
SAMPLE_CONTACT = "15551234567"


def format_tag_id(n: int) -> str:
    """Printed tag id for sequence number n: 1 -> 'ID_0001'."""
    return f"ID_{n:04d}"


def record_to_dict(r: TagRecord) -> dict:
    return {
        "tag_id": r.tag_id,
        "status": r.status.value,
        "item_name": r.item_name,
        "owner_contact": r.owner_contact,
        "contact_uri": r.contact_uri,
    }


def _text_field(value) -> Optional[str]:
    """Stored string field; numbers (e.g. a contact saved as a number) become text."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else None
    return value if isinstance(value, str) else None


def record_from_dict(tag_id: str, item: dict) -> TagRecord:
    """Build a record from stored JSON. Incomplete or mistyped ACTIVE entries load as NEW."""
    status = TagStatus.ACTIVE if item.get("status") == TagStatus.ACTIVE.value else TagStatus.NEW
    if status is TagStatus.NEW:
        return new_record(tag_id)
    item_name = item.get("item_name")
    contact = _text_field(item.get("owner_contact"))
    uri = item.get("contact_uri")
    well_typed = isinstance(item_name, str) and (uri is None or isinstance(uri, str))
    if not well_typed or not item_name or not (contact or uri):
        logger.warning("Tag cache: incomplete active entry for %s, treating as new", tag_id)
        return new_record(tag_id)
    return TagRecord(
        tag_id=tag_id,
        status=TagStatus.ACTIVE,
        item_name=item_name,
        owner_contact=contact,
        contact_uri=uri or build_contact_uri(contact),
    )


def seed_records(count: int = SEED_COUNT) -> Dict[str, TagRecord]:
    """Deterministic demo set: count sequential NEW tags, ID_0001 active."""
    records = {format_tag_id(i): new_record(format_tag_id(i)) for i in range(1, count + 1)}
    records[SAMPLE_TAG_ID] = TagRecord(
        tag_id=SAMPLE_TAG_ID,
        status=TagStatus.ACTIVE,
        item_name=SAMPLE_ITEM_NAME,
        owner_contact=SAMPLE_CONTACT,
        contact_uri=build_contact_uri(SAMPLE_CONTACT),
    )
    return records


class LocalTagCache:
    """Tag id -> record mapping kept in one JSON file.

    Never raises: when the file cannot be read the cache behaves as empty,
    and failed writes are logged and dropped.
    """

    def __init__(self, path: Path = TAG_CACHE_PATH, seed_count: int = SEED_COUNT) -> None:
        self._path = Path(path)
        self._seed_count = seed_count
        self._seed_checked = False

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Optional[Dict[str, TagRecord]]:
        """All stored records; {} if the file does not exist, None if it is unreadable."""
        try:
            data = json.loads(self._path.read_text())
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Tag cache: cannot read %s (%s)", self._path, e)
            return None
        entries = data.get(TAG_CACHE_KEY) if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            return {}
        out = {}
        for tag_id, item in entries.items():
            if not isinstance(item, dict):
                continue
            try:
                out[tag_id] = record_from_dict(tag_id, item)
            except (TypeError, ValueError) as e:
                logger.warning("Tag cache: skipping unreadable entry %s (%s)", tag_id, e)
        return out

    def _write(self, records: Dict[str, TagRecord]) -> bool:
        data = {TAG_CACHE_KEY: {tag_id: record_to_dict(r) for tag_id, r in records.items()}}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.warning("Tag cache: write to %s failed (%s), change not persisted", self._path, e)
            return False
        return True

    def get(self, tag_id: str) -> TagRecord:
        """Stored record for tag_id, or a NEW record (not persisted) when absent."""
        records = self._read() or {}
        found = records.get(tag_id)
        return found if found is not None else new_record(tag_id)

    def put(self, tag_id: str, record: TagRecord) -> None:
        """Upsert; last write wins."""
        records = self._read() or {}
        records[tag_id] = record
        if self._write(records):
            logger.debug("Tag cache: stored %s (%s)", tag_id, record.status.value)

    def ensure_seeded(self) -> None:
        """Seed the demo set once per process, and only into an empty store."""
        if self._seed_checked:
            return
        self._seed_checked = True
        records = self._read()
        if records is None or records:
            return
        if self._write(seed_records(self._seed_count)):
            logger.info("Tag cache: seeded %d demo tags in %s", self._seed_count, self._path)

    def all_records(self) -> List[TagRecord]:
        """Every stored record, in id order."""
        records = self._read() or {}
        return [records[k] for k in sorted(records)]
