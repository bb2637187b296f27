"""Gemini generateContent client for the one-line weather tip."""

import logging
import os

import httpx

from skyview.config.schema import GEMINI_BASE_URL
from skyview.errors import AdvisoryError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


def build_prompt(city: str, current_temp: int, condition_text: str, max_words: int = 10) -> str:
    return (
        f"Weather in {city}: {current_temp} degrees, {condition_text}. "
        f"Give one very short, useful tip (under {max_words} words)."
    )


def extract_text(data: dict) -> str:
    """Pull the generated text out of a generateContent response."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text", "") for p in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise AdvisoryError(f"Malformed advisory response: {e}") from e
    text = text.strip()
    if not text:
        raise AdvisoryError("Empty advisory response")
    return text


class AdvisoryClient:
    """Thin wrapper around the Gemini REST API.

    The API key is read from the environment when not passed explicitly. A
    missing key only fails when a tip is actually requested.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = GEMINI_BASE_URL,
        model: str = DEFAULT_MODEL,
        api_key_env: str = "GEMINI_API_KEY",
        timeout: float = 15.0,
        max_words: int = 10,
    ):
        self.api_key = api_key or os.environ.get(api_key_env, "")
        self.api_key_env = api_key_env
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.max_words = max_words

    def _headers(self) -> dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def advise(self, city: str, current_temp: int, condition_text: str) -> str:
        """Return a short, trimmed tip for the current conditions.

        Raises:
            AdvisoryError: Missing key, transport failure, error status, or a
                response without text.
        """
        if not self.api_key:
            raise AdvisoryError(f"{self.api_key_env} not set")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [
                {"parts": [{"text": build_prompt(city, current_temp, condition_text, self.max_words)}]}
            ]
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, headers=self._headers(), json=body)
        except httpx.RequestError as e:
            raise AdvisoryError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            raise AdvisoryError(f"HTTP {resp.status_code}: {resp.text[:200]}")
        try:
            data = resp.json()
        except ValueError as e:
            raise AdvisoryError("Advisory response is not JSON") from e
        return extract_text(data)
