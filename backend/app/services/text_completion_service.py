"""Text-completion assistant: menu copy and manager insights.

Calls a Gemini-style ``generateContent`` endpoint. Every failure is logged and
turned into a fixed fallback string; nothing here raises to the caller.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

DESCRIPTION_EMPTY_FALLBACK = "Freshly prepared for you."
DESCRIPTION_ERROR_FALLBACK = "A classic favorite prepared with fresh ingredients."
INSIGHTS_EMPTY_FALLBACK = "Keep up the good work!"
INSIGHTS_ERROR_FALLBACK = "Unable to generate insights at this moment."


class TextCompletionError(Exception):
    """Raised by the client when a completion cannot be obtained."""


class TextCompletionClient:
    """Minimal generateContent client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key if api_key is not None else settings.text_completion_api_key
        self.model = model or settings.text_completion_model
        self.base_url = (base_url or settings.text_completion_base_url).rstrip("/")
        self.timeout = timeout or settings.text_completion_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def complete(self, prompt: str) -> str:
        """Return the reply text (possibly empty); raise TextCompletionError on failure."""
        if not self.is_configured:
            raise TextCompletionError("Text completion API key not configured")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    params={"key": self._api_key},
                    json=payload,
                )
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TextCompletionError(str(e)) from e
        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        parts = []
        for candidate in data.get("candidates") or []:
            for part in (candidate.get("content") or {}).get("parts") or []:
                text = part.get("text")
                if text:
                    parts.append(text)
            if parts:
                break
        return "".join(parts).strip()


async def generate_menu_description(client: TextCompletionClient, item_name: str, ingredients: str) -> str:
    prompt = (
        f'Write a short, appetizing, mouth-watering menu description (max 25 words) for a dish named '
        f'"{item_name}" containing: {ingredients}. Do not use hashtags or markdown.'
    )
    try:
        text = await client.complete(prompt)
    except TextCompletionError as e:
        logger.warning(f"Menu description generation failed: {e}")
        return DESCRIPTION_ERROR_FALLBACK
    return text or DESCRIPTION_EMPTY_FALLBACK


async def get_manager_insights(client: TextCompletionClient, metrics: Dict[str, Any]) -> str:
    prompt = (
        "You are an expert Restaurant Manager. Analyze these daily metrics and give 3 bullet points "
        "of advice/insight. Keep it brief.\n"
        f"Metrics: {json.dumps(metrics, default=str)}"
    )
    try:
        text = await client.complete(prompt)
    except TextCompletionError as e:
        logger.warning(f"Manager insights generation failed: {e}")
        return INSIGHTS_ERROR_FALLBACK
    return text or INSIGHTS_EMPTY_FALLBACK
