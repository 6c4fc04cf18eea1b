"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherInsightsError(Exception):
    """Base class for errors raised while resolving or acquiring a location."""


class QueryValidationError(WeatherInsightsError):
    """Raised when a search query is empty or whitespace-only."""


class GeolocationError(WeatherInsightsError):
    """Raised when the device position cannot be obtained."""

    def __init__(self, message: str, *, reason: str = "unavailable") -> None:
        super().__init__(message)
        self.reason = reason


class ProviderError(WeatherInsightsError):
    """Raised when an external provider request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WeatherFetchError(ProviderError):
    """Raised when the weather provider request fails."""


class LocationFetchError(ProviderError):
    """Raised when reverse geocoding for location details fails."""


class GeocodingError(ProviderError):
    """Raised when a forward geocoding (search) request fails."""


class ProviderPayloadError(ProviderError):
    """Raised when a provider returns a malformed or non-JSON payload."""


class LocationNotFoundError(WeatherInsightsError):
    """Raised when the geocoder returns no candidate for a query."""


class StaleCycleError(WeatherInsightsError):
    """Raised when an acquisition cycle was superseded by a newer one."""

    def __init__(self, generation: int, latest: int) -> None:
        super().__init__(
            f"Acquisition cycle {generation} superseded by cycle {latest}; result discarded."
        )
        self.generation = generation
        self.latest = latest
