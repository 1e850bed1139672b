"""Tag lifecycle: which view a scanned tag is in, and the flow that drives it."""
import asyncio
import logging
from typing import Dict, Optional, Set

from scantoreturn.config import REDIRECT_DELAY_SEC
from scantoreturn.core.activation import ActivationEngine
from scantoreturn.core.errors import InvalidTransitionError, ResolutionTimeoutError
from scantoreturn.core.resolution import ResolutionEngine
from scantoreturn.models.lifecycle import TagView
from scantoreturn.models.tag import ActivationRequest, TagRecord

logger = logging.getLogger(__name__)

# view -> views reachable from it
TRANSITIONS: Dict[TagView, Set[TagView]] = {
    TagView.LANDING: {TagView.LANDING, TagView.RESOLVING},
    TagView.RESOLVING: {TagView.ACTIVATING, TagView.FOUND, TagView.ERROR},
    TagView.ACTIVATING: {TagView.SUCCESS, TagView.LANDING},
    TagView.FOUND: {TagView.LANDING, TagView.RESOLVING},
    TagView.SUCCESS: {TagView.RESOLVING},
    TagView.ERROR: {TagView.LANDING},
}


class TagLifecycle:
    """State machine over TagView. Pure; no I/O."""

    def __init__(self) -> None:
        self.view = TagView.LANDING
        self.tag_id: Optional[str] = None
        self.record: Optional[TagRecord] = None
        self.error: Optional[str] = None

    def _move(self, target: TagView) -> TagView:
        if target not in TRANSITIONS[self.view]:
            raise InvalidTransitionError(f"Cannot go from {self.view.value} to {target.value}")
        logger.debug("Lifecycle %s: %s -> %s", self.tag_id, self.view.value, target.value)
        self.view = target
        return target

    def open(self, tag_id: Optional[str]) -> TagView:
        """Entry point: no tag id shows the landing view, otherwise start resolving."""
        tag_id = (tag_id or "").strip()
        if not tag_id:
            self.tag_id = None
            self.record = None
            self.error = None
            return self._move(TagView.LANDING)
        self.tag_id = tag_id
        self.record = None
        self.error = None
        return self._move(TagView.RESOLVING)

    def resolved(self, record: TagRecord) -> TagView:
        self.record = record
        return self._move(TagView.FOUND if record.is_active else TagView.ACTIVATING)

    def failed(self, message: str) -> TagView:
        self.error = message
        return self._move(TagView.ERROR)

    def submitted(self) -> TagView:
        return self._move(TagView.SUCCESS)

    def refresh(self) -> TagView:
        """Re-enter resolving to confirm the tag state with the authoritative source."""
        return self._move(TagView.RESOLVING)

    def recover(self) -> TagView:
        """Leave the current view for the landing view (the error view's only action)."""
        self.tag_id = None
        self.record = None
        self.error = None
        return self._move(TagView.LANDING)


class TagSession:
    """Drives one TagLifecycle with the resolution and activation engines."""

    def __init__(
        self,
        resolver: ResolutionEngine,
        activator: ActivationEngine,
        endpoint: Optional[str],
        redirect_delay: float = REDIRECT_DELAY_SEC,
    ) -> None:
        self._resolver = resolver
        self._activator = activator
        self._endpoint = endpoint
        self._redirect_delay = redirect_delay
        self.lifecycle = TagLifecycle()

    @property
    def view(self) -> TagView:
        return self.lifecycle.view

    async def _resolve(self) -> TagView:
        try:
            record = await self._resolver.resolve(self.lifecycle.tag_id, self._endpoint)
        except ResolutionTimeoutError as e:
            return self.lifecycle.failed(str(e))
        return self.lifecycle.resolved(record)

    async def open(self, tag_id: Optional[str]) -> TagView:
        if self.lifecycle.open(tag_id) is TagView.RESOLVING:
            return await self._resolve()
        return self.view

    async def activate(self, item_name: str, owner_contact: str) -> bool:
        """Submit the activation form; on success show SUCCESS, then re-resolve after the delay.

        Returns False (staying in ACTIVATING) when the write failed.
        ActivationValidationError propagates unchanged.
        """
        if self.view is not TagView.ACTIVATING:
            raise InvalidTransitionError(f"Cannot activate from {self.view.value}")
        request = ActivationRequest(
            tag_id=self.lifecycle.tag_id,
            item_name=item_name,
            owner_contact=owner_contact,
        )
        if not await self._activator.activate(request, self._endpoint):
            return False
        self.lifecycle.submitted()
        if self._redirect_delay > 0:
            await asyncio.sleep(self._redirect_delay)
        self.lifecycle.refresh()
        await self._resolve()
        return True

    def recover(self) -> TagView:
        return self.lifecycle.recover()
