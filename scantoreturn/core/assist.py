"""Optional text assist via the Gemini REST API; fixed fallbacks when unavailable.

Nothing here raises: callers always get usable text, so the scan and
activation flows never wait on or fail because of this service.
"""
import json
import logging
from typing import List, Optional

import httpx

from scantoreturn.config import ASSIST_TIMEOUT_SEC, GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_MODEL
from scantoreturn.core.contact import default_found_message

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _extract_text(res) -> Optional[str]:
    """First non-empty text part of a generateContent reply; None for any other shape."""
    if not isinstance(res, dict):
        return None
    for cand in _as_list(res.get("candidates")):
        content = cand.get("content") if isinstance(cand, dict) else None
        if not isinstance(content, dict):
            continue
        for part in _as_list(content.get("parts")):
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str) and text.strip():
                return text.strip()
    return None


class TextAssist:
    """Gemini client; disabled (fallbacks only) when no API key is configured."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = ASSIST_TIMEOUT_SEC,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def _generate(self, prompt: str, json_output: bool = False) -> Optional[str]:
        if not self.enabled:
            return None
        url = f"{self._base_url}/v1beta/models/{self._model}:generateContent"
        payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if json_output:
            payload["generationConfig"] = {"responseMimeType": "application/json"}
        try:
            if self._client is not None:
                resp = await self._client.post(
                    url, params={"key": self._api_key}, json=payload, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(url, params={"key": self._api_key}, json=payload)
            resp.raise_for_status()
            return _extract_text(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Assist: Gemini request failed (%s)", e)
            return None

    async def found_message(self, item_name: Optional[str], location_hint: Optional[str] = None) -> str:
        """Short polite message a finder can send to the owner."""
        item = (item_name or "").strip() or "item"
        prompt = (
            "You are helping a good samaritan who found a lost item.\n"
            f'The item is: "{item}".\n'
            + (f'The finder is currently near: "{location_hint}".\n' if location_hint else "")
            + "Draft a short, polite, and safe WhatsApp message (under 30 words) that the "
            "finder can send to the owner. Do not include placeholders."
        )
        text = await self._generate(prompt)
        return text or default_found_message(item)

    async def suggest_item_names(self, category: str) -> List[str]:
        """Up to three descriptive item names for a category; [] when unavailable."""
        category = (category or "").strip()
        if len(category) < 3:
            return []
        prompt = (
            f'List 3 short, descriptive names for a lost-and-found tag attached to a "{category}".\n'
            'Return ONLY a JSON array of strings. Example: ["My Blue Keys", "Spare Car Key"]'
        )
        text = await self._generate(prompt, json_output=True)
        if not text:
            return []
        try:
            names = json.loads(text)
        except ValueError:
            logger.warning("Assist: suggestions were not JSON")
            return []
        if not isinstance(names, list):
            return []
        out = [str(n).strip()[:80] for n in names if str(n).strip()]
        return out[:MAX_SUGGESTIONS]
