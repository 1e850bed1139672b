"""Tag lookup, activation, dashboard listing, and printable batches."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from scantoreturn.api.state import AppState, get_state
from scantoreturn.core.contact import contact_link, default_found_message
from scantoreturn.core.dashboard import build_scan_url, is_backend_url, summarize_tags, tag_id_batch
from scantoreturn.core.errors import ActivationValidationError, ResolutionTimeoutError
from scantoreturn.core.record_gateway import is_remote_endpoint
from scantoreturn.core.tag_cache import record_to_dict
from scantoreturn.models.lifecycle import TagView
from scantoreturn.models.tag import ActivationRequest

router = APIRouter()


class ActivateBody(BaseModel):
    item_name: str
    owner_contact: str


async def _resolve_or_504(state: AppState, tag_id: str):
    try:
        return await state.resolver.resolve(tag_id, state.endpoint)
    except ResolutionTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e))


@router.get("/")
def list_tags(state: AppState = Depends(get_state)):
    """All locally known tags plus counts (the dashboard overview)."""
    state.cache.ensure_seeded()
    records = state.cache.all_records()
    return {
        "mode": "remote" if is_remote_endpoint(state.endpoint) else "local",
        "stats": summarize_tags(records),
        "tags": [record_to_dict(r) for r in records],
    }


@router.get("/batch")
def batch(start: int = 1, count: int = 20, base_url: Optional[str] = None):
    """Sequential tag ids with the scan URL to encode in each QR code."""
    try:
        ids = tag_id_batch(start, count)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if base_url and is_backend_url(base_url):
        raise HTTPException(
            status_code=400,
            detail="Base URL is the spreadsheet backend; use the address of the scan page instead.",
        )
    kw = {"base_url": base_url} if base_url else {}
    return [{"tag_id": t, "url": build_scan_url(t, **kw)} for t in ids]


@router.get("/{tag_id}")
async def get_tag(tag_id: str, state: AppState = Depends(get_state)):
    """Resolve one tag (remote when reachable, else local cache)."""
    record = await _resolve_or_504(state, tag_id)
    return record_to_dict(record)


@router.post("/{tag_id}/activate")
async def activate_tag(
    tag_id: str,
    body: ActivateBody,
    state: AppState = Depends(get_state),
):
    """Bind item and contact to the tag. Success is optimistic when a remote endpoint is used."""
    request = ActivationRequest(tag_id=tag_id, item_name=body.item_name, owner_contact=body.owner_contact)
    try:
        ok = await state.activator.activate(request, state.endpoint)
    except ActivationValidationError as e:
        raise HTTPException(status_code=400, detail={"field": e.field, "message": str(e)})
    if not ok:
        raise HTTPException(status_code=502, detail="Activation failed. Please check your connection.")
    return {"success": True, "view": TagView.SUCCESS.value, "redirect_after_sec": state.redirect_delay}


@router.get("/{tag_id}/contact-link")
async def get_contact_link(
    tag_id: str,
    message: Optional[str] = None,
    state: AppState = Depends(get_state),
):
    """Messaging link for the finder, with the message pre-filled."""
    record = await _resolve_or_504(state, tag_id)
    if not record.is_active:
        raise HTTPException(status_code=404, detail="Tag is not activated")
    text = message if message else default_found_message(record.item_name)
    return {"contact_link": contact_link(record, text), "message": text}
