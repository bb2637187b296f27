"""Open-Meteo geocoding client: free-text place name -> best matching location."""

import logging

from skyview.config.schema import OPEN_METEO_GEOCODING_URL
from skyview.errors import LocationNotFound, NetworkError
from skyview.ingest.http import get_json
from skyview.models.location import Location

logger = logging.getLogger(__name__)


class GeocodingClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_GEOCODING_URL,
        language: str = "en",
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_base_delay: float = 1.0,
    ):
        self.base_url = base_url
        self.language = language
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def _first_result(self, params: dict) -> dict | None:
        data = await get_json(
            self.base_url,
            params=params,
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
        results = data.get("results") if isinstance(data, dict) else None
        return results[0] if results else None

    async def locate(self, query: str) -> Location:
        """Resolve ``query`` ("city" or "city, country") to a single location.

        Tries the full string, then the first comma-separated segment, then a
        relaxed single-result lookup without a language filter.

        Raises:
            LocationNotFound: No variant produced a match.
            NetworkError: Transport failure, non-success status, or a match
                without usable coordinates.
        """
        query = query.strip()
        if not query:
            raise LocationNotFound(query)

        params = {"count": 5, "language": self.language, "format": "json"}
        match = await self._first_result({"name": query, **params})

        if match is None and "," in query:
            head = query.split(",")[0].strip()
            if head:
                logger.debug("No match for %r, retrying with %r", query, head)
                match = await self._first_result({"name": head, **params})

        if match is None:
            logger.debug("Falling back to relaxed lookup for %r", query)
            match = await self._first_result({"name": query, "count": 1, "format": "json"})

        if match is None:
            logger.info("Geocoding found nothing for %r", query)
            raise LocationNotFound(query)

        try:
            return Location(
                latitude=float(match["latitude"]),
                longitude=float(match["longitude"]),
                name=match.get("name", query),
                country=match.get("country", "") or "",
            )
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkError(f"Malformed geocoding match for {query!r}: {e!r}") from e
