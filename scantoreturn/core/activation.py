"""Bind an item name and owner contact to a tag id."""
import asyncio
import logging
from typing import Optional

from scantoreturn.config import LOCAL_WRITE_LATENCY_SEC
from scantoreturn.core.contact import build_contact_uri, normalize_contact
from scantoreturn.core.errors import ActivationValidationError
from scantoreturn.core.record_gateway import RecordGateway, is_remote_endpoint
from scantoreturn.core.tag_cache import LocalTagCache
from scantoreturn.models.outcomes import Submitted
from scantoreturn.models.tag import ActivationRequest, TagRecord, TagStatus

logger = logging.getLogger(__name__)


def validate_request(request: ActivationRequest) -> ActivationRequest:
    """Return the request with trimmed item name and digits-only contact.

    Raises ActivationValidationError when a required field is empty.
    """
    tag_id = (request.tag_id or "").strip()
    item_name = (request.item_name or "").strip()
    contact = normalize_contact(request.owner_contact)
    if not tag_id:
        raise ActivationValidationError("tag_id", "Tag id is required")
    if not item_name:
        raise ActivationValidationError("item_name", "Item name is required")
    if not contact:
        raise ActivationValidationError("owner_contact", "Contact number must contain digits")
    return ActivationRequest(tag_id=tag_id, item_name=item_name, owner_contact=contact)


def active_record(request: ActivationRequest) -> TagRecord:
    return TagRecord(
        tag_id=request.tag_id,
        status=TagStatus.ACTIVE,
        item_name=request.item_name,
        owner_contact=request.owner_contact,
        contact_uri=build_contact_uri(request.owner_contact),
    )


class ActivationEngine:
    """Writes to the remote service when configured and mirrors into the local cache.

    The remote write cannot be confirmed, so a transmitted write is mirrored
    locally as ACTIVE straight away (eventual consistency with unconfirmed
    writes). A transport failure returns False and leaves the cache alone.
    """

    def __init__(
        self,
        cache: LocalTagCache,
        gateway: RecordGateway,
        local_latency: float = LOCAL_WRITE_LATENCY_SEC,
    ) -> None:
        self._cache = cache
        self._gateway = gateway
        self._local_latency = local_latency

    async def activate(self, request: ActivationRequest, endpoint: Optional[str]) -> bool:
        req = validate_request(request)
        if is_remote_endpoint(endpoint):
            outcome = await self._gateway.write(req, endpoint.strip())
            if not isinstance(outcome, Submitted):
                return False
            self._cache.put(req.tag_id, active_record(req))
            logger.info("Activated %s (remote, mirrored locally)", req.tag_id)
            return True

        if self._local_latency > 0:
            await asyncio.sleep(self._local_latency)
        self._cache.put(req.tag_id, active_record(req))
        logger.info("Activated %s (local only)", req.tag_id)
        return True
