"""Shared application state (injected into routes)."""
from typing import Optional

from scantoreturn.config import REDIRECT_DELAY_SEC
from scantoreturn.core.activation import ActivationEngine
from scantoreturn.core.assist import TextAssist
from scantoreturn.core.lifecycle import TagSession
from scantoreturn.core.record_gateway import RecordGateway
from scantoreturn.core.resolution import ResolutionEngine
from scantoreturn.core.settings_store import EndpointSettings
from scantoreturn.core.tag_cache import LocalTagCache


class AppState:
    """Owns the process-wide cache, endpoint setting and gateway; engines get them passed in."""

    def __init__(
        self,
        cache: Optional[LocalTagCache] = None,
        settings: Optional[EndpointSettings] = None,
        gateway: Optional[RecordGateway] = None,
        assist: Optional[TextAssist] = None,
        local_read_latency: Optional[float] = None,
        local_write_latency: Optional[float] = None,
        redirect_delay: float = REDIRECT_DELAY_SEC,
    ) -> None:
        self.cache = cache or LocalTagCache()
        self.settings = settings or EndpointSettings()
        self.gateway = gateway or RecordGateway()
        self.assist = assist or TextAssist()
        self.redirect_delay = redirect_delay
        read_kw = {} if local_read_latency is None else {"local_latency": local_read_latency}
        write_kw = {} if local_write_latency is None else {"local_latency": local_write_latency}
        self.resolver = ResolutionEngine(self.cache, self.gateway, **read_kw)
        self.activator = ActivationEngine(self.cache, self.gateway, **write_kw)

    @property
    def endpoint(self) -> str:
        return self.settings.get_endpoint()

    def new_session(self) -> TagSession:
        return TagSession(self.resolver, self.activator, self.endpoint, self.redirect_delay)


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState()
    return _state
