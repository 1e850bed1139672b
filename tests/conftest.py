import json

import httpx
import pytest

from scantoreturn.core.activation import ActivationEngine
from scantoreturn.core.record_gateway import RecordGateway
from scantoreturn.core.resolution import ResolutionEngine
from scantoreturn.core.tag_cache import LocalTagCache

ENDPOINT = "https://records.example/macros/exec"


class FakeService:
    """Stands in for the spreadsheet web app; records every request it sees."""

    def __init__(self, respond=None):
        self.requests = []
        self._respond = respond or (lambda request: httpx.Response(200, json={"status": "new"}))

    def __call__(self, request):
        self.requests.append(request)
        return self._respond(request)


def json_reply(payload, status=200):
    return lambda request: httpx.Response(status, text=json.dumps(payload))


def text_reply(body, status=200):
    return lambda request: httpx.Response(status, text=body)


def refuse(request):
    raise httpx.ConnectError("Connection refused", request=request)


def make_gateway(handler, **kwargs) -> RecordGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RecordGateway(client=client, **kwargs)


@pytest.fixture
def cache(tmp_path):
    return LocalTagCache(tmp_path / "tag_cache.json")


@pytest.fixture
def engines(cache):
    """Factory: (resolver, activator) over the shared cache with a fake remote service."""

    def build(handler, **gateway_kwargs):
        gateway = make_gateway(handler, **gateway_kwargs)
        return (
            ResolutionEngine(cache, gateway, local_latency=0),
            ActivationEngine(cache, gateway, local_latency=0),
        )

    return build
