"""Error taxonomy for location lookup, forecast retrieval and advisories."""


class SkyviewError(Exception):
    """Base class for all skyview errors."""


class LocationNotFound(SkyviewError):
    """Raised when geocoding yields no candidate for any query variant."""

    def __init__(self, query: str):
        super().__init__(f"Location not found: {query!r}")
        self.query = query


class NetworkError(SkyviewError):
    """Raised on transport failures or non-success HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DataShapeError(SkyviewError):
    """Raised when a forecast payload violates the parallel-array invariants."""


class AdvisoryError(SkyviewError):
    """Raised by the advisory client. Never propagates past the session."""
