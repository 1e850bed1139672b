"""Resolve a tag id to its record: remote service when reachable, else the local cache."""
import asyncio
import logging
from typing import Optional

from scantoreturn.config import LOCAL_READ_LATENCY_SEC
from scantoreturn.core.errors import ResolutionTimeoutError
from scantoreturn.core.record_gateway import RecordGateway, is_remote_endpoint
from scantoreturn.core.tag_cache import LocalTagCache
from scantoreturn.models.outcomes import Found, LookupOutcome, NotFound, TimedOut
from scantoreturn.models.tag import TagRecord, new_record

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Two steps, each callable on its own: attempt_remote() then resolve_local().

    The remote service is authoritative whenever it answers. A timeout is the
    only remote failure surfaced to the caller; returning NEW there could let
    a bound tag be activated again because of a network blip. Connection
    failures and malformed responses degrade silently to the cache.
    """

    def __init__(
        self,
        cache: LocalTagCache,
        gateway: RecordGateway,
        local_latency: float = LOCAL_READ_LATENCY_SEC,
    ) -> None:
        self._cache = cache
        self._gateway = gateway
        self._local_latency = local_latency

    async def attempt_remote(self, tag_id: str, endpoint: Optional[str]) -> Optional[LookupOutcome]:
        """Remote lookup outcome, or None when no remote endpoint is configured."""
        if not is_remote_endpoint(endpoint):
            return None
        return await self._gateway.lookup(tag_id, endpoint.strip())

    async def resolve_local(self, tag_id: str) -> TagRecord:
        """Cache read; never fails. Unknown ids come back as NEW."""
        self._cache.ensure_seeded()
        if self._local_latency > 0:
            await asyncio.sleep(self._local_latency)
        return self._cache.get(tag_id)

    async def resolve(self, tag_id: str, endpoint: Optional[str]) -> TagRecord:
        """Current record for tag_id. Raises ResolutionTimeoutError on lookup timeout."""
        outcome = await self.attempt_remote(tag_id, endpoint)
        if isinstance(outcome, Found):
            return outcome.record
        if isinstance(outcome, NotFound):
            return new_record(tag_id)
        if isinstance(outcome, TimedOut):
            raise ResolutionTimeoutError(tag_id, outcome.timeout_sec)
        if outcome is not None:
            logger.warning(
                "Resolve %s: remote %s, falling back to local cache",
                tag_id,
                type(outcome).__name__,
            )
        return await self.resolve_local(tag_id)
