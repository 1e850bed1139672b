"""Errors surfaced to callers. Everything else degrades to the local cache."""


class ScanToReturnError(Exception):
    """Base exception for tag resolution and activation."""


class ResolutionTimeoutError(ScanToReturnError):
    """Remote lookup did not answer in time; the tag state is unknown."""

    def __init__(self, tag_id: str, timeout_sec: float) -> None:
        super().__init__(f"Connection timed out after {timeout_sec:g}s resolving {tag_id}")
        self.tag_id = tag_id
        self.timeout_sec = timeout_sec


class ActivationValidationError(ScanToReturnError):
    """Required activation field missing; raised before any network call."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InvalidTransitionError(ScanToReturnError):
    """Lifecycle event not allowed from the current view."""
