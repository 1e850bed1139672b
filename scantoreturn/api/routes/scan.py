"""Scan entry point: ?tag=<id> resolves the tag and reports which view to show."""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scantoreturn.api.state import AppState, get_state
from scantoreturn.core.contact import contact_link, default_found_message
from scantoreturn.core.tag_cache import record_to_dict
from scantoreturn.models.lifecycle import TagView

router = APIRouter()


@router.get("/")
async def scan(tag: Optional[str] = None, state: AppState = Depends(get_state)):
    """Landing view without a tag; otherwise activating, found, or error (timeout)."""
    session = state.new_session()
    view = await session.open(tag)
    lifecycle = session.lifecycle
    if view is TagView.ERROR:
        return JSONResponse(
            status_code=504,
            content={
                "view": view.value,
                "tag_id": lifecycle.tag_id,
                "detail": lifecycle.error,
                "recovery": TagView.LANDING.value,
            },
        )
    body = {
        "view": view.value,
        "tag": record_to_dict(lifecycle.record) if lifecycle.record else None,
    }
    if view is TagView.FOUND:
        body["contact_link"] = contact_link(
            lifecycle.record, default_found_message(lifecycle.record.item_name)
        )
    return body
