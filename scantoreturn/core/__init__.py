"""Core services: local cache, remote gateway, resolution, activation, lifecycle."""
from scantoreturn.core.activation import ActivationEngine
from scantoreturn.core.lifecycle import TagLifecycle, TagSession
from scantoreturn.core.record_gateway import RecordGateway
from scantoreturn.core.resolution import ResolutionEngine
from scantoreturn.core.tag_cache import LocalTagCache

__all__ = [
    "ActivationEngine",
    "LocalTagCache",
    "RecordGateway",
    "ResolutionEngine",
    "TagLifecycle",
    "TagSession",
]
