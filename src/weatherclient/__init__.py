"""
OpenWeather API client for current weather and forecast data.
Returns typed records wrapped in Success / Failure outcomes.
"""

__all__ = [
    'WeatherClient', 'WeatherSettings',
    'WeatherRecord', 'ForecastRecord', 'ForecastEntry', 'ConditionDescriptor',
    'Success', 'Failure', 'WeatherError', 'TransportFailure', 'HttpStatusFailure', 'DecodeFailure',
]

from .client import WeatherClient
from .config import WeatherSettings
from .models import ConditionDescriptor, ForecastEntry, ForecastRecord, WeatherRecord
from .outcome import DecodeFailure, Failure, HttpStatusFailure, Success, TransportFailure, WeatherError
