"""Optional text assist for finders and owners; always answers, with fallbacks."""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from scantoreturn.api.state import AppState, get_state

router = APIRouter()


class FoundMessageBody(BaseModel):
    item_name: Optional[str] = None
    location_hint: Optional[str] = None


class ItemNamesBody(BaseModel):
    category: str


@router.post("/found-message")
async def found_message(body: FoundMessageBody, state: AppState = Depends(get_state)):
    message = await state.assist.found_message(body.item_name, body.location_hint)
    return {"message": message, "assisted": state.assist.enabled}


@router.post("/item-names")
async def item_names(body: ItemNamesBody, state: AppState = Depends(get_state)):
    return {"suggestions": await state.assist.suggest_item_names(body.category)}
