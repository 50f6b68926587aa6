from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

BASE_URL = "https://api.openweathermap.org/data/2.5"  # OpenWeather v2.5
ICON_HOST = "https://openweathermap.org"
DEFAULT_UNITS = "metric"


@dataclass
class WeatherSettings:
    """Configuration for the OpenWeather API client.

    units defaults to 'metric' (Celsius, m/s); 'imperial' and 'standard'
    are passed straight through to the service.
    """
    api_key: Optional[str] = None
    units: str = DEFAULT_UNITS
    base_url: str = BASE_URL
    icon_host: str = ICON_HOST
    discard_stale: bool = False  # apply only the latest issued fetch per command

    @staticmethod
    def from_env() -> 'WeatherSettings':
        """Create Weather settings from environment variables."""
        api_key = os.environ.get('WEATHER_API_KEY') or None
        units = os.environ.get('WEATHER_UNITS', DEFAULT_UNITS)
        base_url = os.environ.get('WEATHER_BASE_URL', BASE_URL).rstrip('/')
        icon_host = os.environ.get('WEATHER_ICON_HOST', ICON_HOST).rstrip('/')
        discard_stale = os.environ.get('WEATHER_DISCARD_STALE', '0') == '1'
        return WeatherSettings(
            api_key=api_key,
            units=units,
            base_url=base_url,
            icon_host=icon_host,
            discard_stale=discard_stale,
        )

    def icon_url(self, icon_code: str) -> str:
        return f"{self.icon_host}/img/wn/{icon_code}@2x.png"
