"""Dashboard helpers: tag counts, printable tag id batches and scan URLs."""
import urllib.parse
from typing import Iterable, List

from scantoreturn.config import TAG_BASE_URL
from scantoreturn.core.tag_cache import format_tag_id
from scantoreturn.models.tag import TagRecord

MAX_BATCH = 500


def summarize_tags(records: Iterable[TagRecord]) -> dict:
    """Counts for the overview panel."""
    total = active = 0
    for r in records:
        total += 1
        if r.is_active:
            active += 1
    return {"total": total, "active": active, "new": total - active}


def build_scan_url(tag_id: str, base_url: str = TAG_BASE_URL) -> str:
    """URL printed in a tag's QR code: <base>?tag=<tag_id>."""
    parsed = urllib.parse.urlparse(base_url)
    query = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    query = [(k, v) for k, v in query if k != "tag"] + [("tag", tag_id)]
    return urllib.parse.urlunparse(parsed._replace(query=urllib.parse.urlencode(query)))


def tag_id_batch(start: int, count: int) -> List[str]:
    """Sequential tag ids for a print run, e.g. (1, 3) -> ID_0001..ID_0003."""
    if start < 1:
        raise ValueError("start must be >= 1")
    if not 1 <= count <= MAX_BATCH:
        raise ValueError(f"count must be between 1 and {MAX_BATCH}")
    return [format_tag_id(n) for n in range(start, start + count)]


def is_backend_url(base_url: str) -> bool:
    """True when base_url is the spreadsheet web app rather than the scan page.

    QR codes pointing there would hit the raw backend instead of the app, so
    batches are not generated for it.
    """
    host = urllib.parse.urlparse((base_url or "").strip()).netloc.lower()
    return host == "script.google.com" or host.endswith(".script.google.com")
