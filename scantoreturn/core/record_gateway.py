"""Client for the remote record service (spreadsheet web app) via httpx.

Stateless transport: one attempt per call, no retries. Every failure comes
back as a typed outcome instead of an exception so callers can decide per
branch whether to degrade to the local cache.
"""
import asyncio
import json
import logging
import urllib.parse
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from scantoreturn.config import LOOKUP_TIMEOUT_SEC, MESSAGING_BASE, WRITE_TIMEOUT_SEC
from scantoreturn.core.contact import build_contact_uri, normalize_contact
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
from scantoreturn.models.tag import ActivationRequest, TagRecord, TagStatus

logger = logging.getLogger(__name__)


def is_remote_endpoint(endpoint: Optional[str]) -> bool:
    """True for an http(s) URL with a host; anything else means local-only mode."""
    if not endpoint:
        return False
    parsed = urllib.parse.urlparse(endpoint.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_lookup_body(tag_id: str, body: str, messaging_base: str = MESSAGING_BASE) -> LookupOutcome:
    """Interpret a 2xx lookup body.

    Markup (an HTML error or login page) and non-JSON text are Malformed.
    JSON with status "found" plus item and contact is Found; any other JSON
    is NotFound, i.e. the tag is treated as new.
    """
    text = (body or "").lstrip()
    if text.startswith("<"):
        return Malformed("markup body instead of JSON")
    try:
        data = json.loads(text)
    except ValueError:
        return Malformed("body is not JSON")
    if not isinstance(data, dict) or data.get("status") != TagStatus.ACTIVE.value:
        return NotFound(tag_id)

    item_name = str(data.get("item") or "").strip()
    phone = str(data.get("phone") or "").strip()
    masked_uri = str(data.get("redirect_url") or data.get("redirectUrl") or "").strip()
    if not item_name or not (normalize_contact(phone) or masked_uri):
        logger.warning("Lookup: %s reported found without item/contact, treating as new", tag_id)
        return NotFound(tag_id)
    return Found(
        TagRecord(
            tag_id=tag_id,
            status=TagStatus.ACTIVE,
            item_name=item_name,
            owner_contact=phone or None,
            contact_uri=masked_uri or build_contact_uri(phone, messaging_base),
        )
    )


class RecordGateway:
    """Bounded-time lookups and fire-and-forget writes against one endpoint per call."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        lookup_timeout: float = LOOKUP_TIMEOUT_SEC,
        write_timeout: float = WRITE_TIMEOUT_SEC,
        messaging_base: str = MESSAGING_BASE,
    ) -> None:
        self._client = client
        self.lookup_timeout = lookup_timeout
        self.write_timeout = write_timeout
        self._messaging_base = messaging_base

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Shared client when one was injected, else a short-lived one."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def _get(self, endpoint: str, tag_id: str) -> httpx.Response:
        async with self._session() as client:
            # No custom headers: some deployments reject preflighted requests.
            return await client.get(
                endpoint,
                params={"tag": tag_id},
                follow_redirects=True,
                timeout=None,  # bounded by wait_for in lookup()
            )

    async def lookup(self, tag_id: str, endpoint: str) -> LookupOutcome:
        """GET <endpoint>?tag=<tag_id>, cancelled after lookup_timeout seconds."""
        try:
            response = await asyncio.wait_for(self._get(endpoint, tag_id), timeout=self.lookup_timeout)
        except asyncio.TimeoutError:
            logger.warning("Lookup: %s timed out after %.1fs", tag_id, self.lookup_timeout)
            return TimedOut(self.lookup_timeout)
        except httpx.TimeoutException as e:
            logger.warning("Lookup: %s transport timeout (%s)", tag_id, e)
            return TimedOut(self.lookup_timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Lookup: %s unreachable (%s)", tag_id, e)
            return Unreachable(str(e) or type(e).__name__)

        if not response.is_success:
            logger.warning("Lookup: %s got HTTP %s", tag_id, response.status_code)
            return Unreachable(f"HTTP {response.status_code}")
        outcome = parse_lookup_body(tag_id, response.text, self._messaging_base)
        if isinstance(outcome, Malformed):
            logger.warning("Lookup: %s malformed response (%s)", tag_id, outcome.detail)
        else:
            logger.debug("Lookup: %s -> %s", tag_id, type(outcome).__name__)
        return outcome

    async def write(self, request: ActivationRequest, endpoint: str) -> WriteOutcome:
        """POST the binding as form fields without reading the response.

        Submitted only means nothing failed at the transport level; the
        service gives no readable confirmation that the row was stored.
        """
        form = {
            "tag_id": request.tag_id,
            "item_name": request.item_name,
            "phone": normalize_contact(request.owner_contact),
        }
        try:
            async with self._session() as client:
                async with client.stream(
                    "POST",
                    endpoint,
                    data=form,
                    follow_redirects=False,
                    timeout=self.write_timeout,
                ):
                    pass
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Activation write for %s failed (%s)", request.tag_id, e)
            return Unreachable(str(e) or type(e).__name__)
        logger.info("Activation write for %s submitted", request.tag_id)
        return Submitted(request.tag_id)
