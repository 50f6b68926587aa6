from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ConditionDescriptor:
    """One weather condition entry, e.g. 'clear sky' with icon '01d'."""
    id: int
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class WeatherRecord:
    """Current conditions for one city."""
    city: str
    temperature: float
    humidity: int
    wind_speed: float
    conditions: Tuple[ConditionDescriptor, ...]
    timestamp: dt.datetime
    feels_like: Optional[float] = None
    pressure: Optional[int] = None
    wind_deg: Optional[int] = None


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: dt.datetime
    temperature: float
    conditions: Tuple[ConditionDescriptor, ...]
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    humidity: Optional[int] = None


@dataclass(frozen=True)
class ForecastRecord:
    """Multi-entry forecast for one city, entries ascending by timestamp."""
    city: str
    entries: Tuple[ForecastEntry, ...]


# ---------------- Decoding -----------------
# Any KeyError / TypeError / ValueError raised below means the payload does
# not have the expected shape; the client turns it into a DecodeFailure.

def _epoch(value: Any) -> dt.datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected epoch seconds, got {value!r}")
    return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    return float(value)


def _optional_number(value: Any) -> Optional[float]:
    return None if value is None else _number(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(_number(value))


def parse_conditions(items: Any) -> Tuple[ConditionDescriptor, ...]:
    if not isinstance(items, list):
        raise TypeError(f"Expected a list of conditions, got {type(items).__name__}")
    out: List[ConditionDescriptor] = []
    for item in items:
        out.append(ConditionDescriptor(
            id=int(item.get('id', 0)),
            main=str(item.get('main', '')),
            description=str(item.get('description', '')),
            icon=str(item['icon']),
        ))
    return tuple(out)


def parse_weather(payload: Dict[str, Any]) -> WeatherRecord:
    """Build a WeatherRecord from an OpenWeather /weather response."""
    main = payload['main']
    wind = payload['wind']
    return WeatherRecord(
        city=str(payload['name']),
        temperature=_number(main['temp']),
        humidity=int(_number(main['humidity'])),
        wind_speed=_number(wind['speed']),
        conditions=parse_conditions(payload.get('weather', [])),
        timestamp=_epoch(payload['dt']),
        feels_like=_optional_number(main.get('feels_like')),
        pressure=_optional_int(main.get('pressure')),
        wind_deg=_optional_int(wind.get('deg')),
    )


def parse_forecast_entry(item: Dict[str, Any]) -> ForecastEntry:
    main = item['main']
    return ForecastEntry(
        timestamp=_epoch(item['dt']),
        temperature=_number(main['temp']),
        conditions=parse_conditions(item.get('weather', [])),
        temp_min=_optional_number(main.get('temp_min')),
        temp_max=_optional_number(main.get('temp_max')),
        humidity=_optional_int(main.get('humidity')),
    )


def parse_forecast(payload: Dict[str, Any]) -> ForecastRecord:
    """Build a ForecastRecord from an OpenWeather /forecast response.

    The service already returns entries in time order; we sort anyway so the
    ascending invariant holds for any payload.
    """
    items = payload['list']
    if not isinstance(items, list):
        raise TypeError(f"Expected 'list' to be a list, got {type(items).__name__}")
    entries = sorted((parse_forecast_entry(i) for i in items), key=lambda e: e.timestamp)
    city = payload.get('city') or {}
    return ForecastRecord(city=str(city.get('name', '')), entries=tuple(entries))
