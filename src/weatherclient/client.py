from __future__ import annotations
from typing import Any, Callable, Dict, Optional, TypeVar
import logging
import httpx

from .config import WeatherSettings
from .models import ForecastRecord, WeatherRecord, parse_forecast, parse_weather
from .outcome import (
    DecodeFailure, FetchOutcome, Failure, HttpStatusFailure, Success, TransportFailure, WeatherError,
)

T = TypeVar('T')


class WeatherClient:
    """
    Client for the OpenWeather current weather and forecast endpoints.

    Every public call is a fresh round trip: no retry, no caching. Failures
    are logged and returned as ``Failure`` values, never raised.
    """

    def __init__(self, settings: WeatherSettings | None = None, http_client: httpx.Client | None = None):
        self.settings = settings or WeatherSettings()
        self._owns_client = http_client is None
        # httpx transport defaults apply (no timeout override)
        self._client = http_client if http_client is not None else httpx.Client()
        self._log = logging.getLogger(__name__)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> 'WeatherClient':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---------------- Internal Helpers -----------------
    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.settings.base_url.rstrip('/')}/{path}"
        try:
            resp = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportFailure(f"Request to {url} failed: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise HttpStatusFailure(resp.status_code, f"Error {resp.status_code} for {url}")
        try:
            return resp.json()
        except (ValueError, RecursionError) as e:  # JSON decode error, or nesting too deep
            raise DecodeFailure(f"Non-JSON response for {url}: {resp.text[:200]}") from e

    def _fetch(self, path: str, city: str, api_key: str, units: Optional[str],
               parse: Callable[[Any], T]) -> FetchOutcome[T]:
        params = {
            'q': city,  # passed through unvalidated, the service decides
            'appid': api_key,
            'units': units or self.settings.units,
        }
        try:
            payload = self._get(path, params)
            try:
                return Success(parse(payload))
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
                raise DecodeFailure(f"Unexpected {path} payload shape: {e!r}") from e
        except HttpStatusFailure as e:
            self._log.error("Failed to fetch %s for %r: %s", path, city, e.status_code)
            return Failure(str(e), e)
        except WeatherError as e:
            self._log.error("Error fetching %s for %r: %s", path, city, e)
            return Failure(str(e), e)

    # ---------------- Public API -----------------
    def fetch_current(self, city: str, api_key: str, units: str | None = None) -> FetchOutcome[WeatherRecord]:
        """
        Fetch current weather for a city.

        Args:
            city: City name, e.g. "Berlin"
            api_key: OpenWeather API key
            units: Unit system; None uses settings.units ('metric' by default)

        Returns:
            Success wrapping a WeatherRecord, or Failure with a readable reason
        """
        return self._fetch('weather', city, api_key, units, parse_weather)

    def fetch_forecast(self, city: str, api_key: str, units: str | None = None) -> FetchOutcome[ForecastRecord]:
        """Fetch the multi-entry forecast for a city (see fetch_current)."""
        return self._fetch('forecast', city, api_key, units, parse_forecast)
