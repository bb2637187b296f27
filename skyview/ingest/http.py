"""Async JSON GET with retry on 503/429 and uniform NetworkError mapping."""

import asyncio
import logging

import httpx

from skyview.errors import NetworkError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = (503, 429)


async def get_json(
    url: str,
    params: dict | None = None,
    timeout: float = 30.0,
    max_retries: int = 0,
    retry_base_delay: float = 1.0,
) -> dict:
    """Fetch ``url`` and decode the JSON body.

    Retries on 503/429 and transport errors with exponential backoff, up to
    ``max_retries`` times. Anything else non-2xx raises NetworkError at once.
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        for attempt in range(max_retries + 1):
            try:
                resp = await client.get(url, params=params)
            except httpx.RequestError as e:
                if attempt < max_retries:
                    delay = retry_base_delay * (2**attempt)
                    logger.warning("Request error for %s, retrying in %.1fs: %s", url, delay, e)
                    await asyncio.sleep(delay)
                    continue
                logger.error("Request to %s failed: %s", url, e)
                raise NetworkError(f"Request failed: {e}") from e

            if resp.status_code in RETRYABLE_STATUSES and attempt < max_retries:
                delay = retry_base_delay * (2**attempt)
                logger.warning(
                    "%s returned %d, retrying in %.1fs (attempt %d/%d)",
                    url, resp.status_code, delay, attempt + 1, max_retries,
                )
                await asyncio.sleep(delay)
                continue
            if resp.status_code >= 400:
                logger.error("%s returned HTTP %d", url, resp.status_code)
                raise NetworkError(f"HTTP {resp.status_code} from {url}", resp.status_code)
            try:
                return resp.json()
            except ValueError as e:
                raise NetworkError(f"Invalid JSON from {url}") from e

    raise NetworkError(f"No response from {url}")
