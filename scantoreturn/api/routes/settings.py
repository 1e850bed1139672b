"""Remote endpoint setting: read, override, reset."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from scantoreturn.api.state import AppState, get_state
from scantoreturn.core.record_gateway import is_remote_endpoint

router = APIRouter()


class EndpointBody(BaseModel):
    """Empty string switches to local-only (demo) mode."""
    endpoint: str


def _endpoint_dict(endpoint: str) -> dict:
    return {"endpoint": endpoint, "mode": "remote" if is_remote_endpoint(endpoint) else "local"}


@router.get("/endpoint")
def get_endpoint(state: AppState = Depends(get_state)):
    return _endpoint_dict(state.endpoint)


@router.put("/endpoint")
def set_endpoint(body: EndpointBody, state: AppState = Depends(get_state)):
    url = body.endpoint.strip()
    if url and not is_remote_endpoint(url):
        raise HTTPException(status_code=400, detail="Endpoint must be an http(s) URL")
    state.settings.set_endpoint(url)
    return _endpoint_dict(state.endpoint)


@router.delete("/endpoint")
def reset_endpoint(state: AppState = Depends(get_state)):
    """Restore the built-in endpoint."""
    return _endpoint_dict(state.settings.reset())
