from __future__ import annotations

from concurrent.futures import Future
from typing import List, Optional, Sequence

import pandas as pd

from weatherclient.models import ForecastEntry

from .presenter import WeatherPresenter

NO_HOMETOWN_MESSAGE = "Set your hometown in settings"


def forecast_frame(entries: Sequence[ForecastEntry]) -> pd.DataFrame:
    """Tabulate forecast entries, one row per entry in time order."""
    rows = []
    for e in entries:
        rows.append({
            'time': e.timestamp.strftime('%Y-%m-%d %H:%M'),
            'temp': e.temperature,
            'min': e.temp_min,
            'max': e.temp_max,
            'humidity': e.humidity,
            'conditions': ', '.join(c.description for c in e.conditions),
        })
    return pd.DataFrame(rows, columns=['time', 'temp', 'min', 'max', 'humidity', 'conditions'])


class ForecastView:
    """
    Headless forecast screen: a search query, an error banner and the forecast list.

    Hometown and API key come from a preferences source exposing
    ``get_hometown()`` / ``get_api_key()``; the view only reads them.
    """

    def __init__(self, presenter: WeatherPresenter, prefs):
        self.presenter = presenter
        self.prefs = prefs
        self.hometown = ''
        self.api_key = ''
        self.search_query = ''

    def on_load(self) -> Optional[Future]:
        self.hometown = self.prefs.get_hometown()
        self.api_key = self.prefs.get_api_key()
        if self.hometown and self.api_key:
            return self.presenter.load_forecast(self.hometown, self.api_key)
        return None

    def on_query_changed(self, query: str) -> Optional[Future]:
        self.search_query = query
        if query:
            return self.presenter.load_forecast(query, self.api_key)
        if self.hometown and self.api_key:
            return self.presenter.load_forecast(self.hometown, self.api_key)
        return None

    def render(self) -> str:
        lines: List[str] = []
        error = self.presenter.error_message.value
        if error:
            lines.append(error)
        forecast = self.presenter.forecast.value
        if not self.search_query and not self.hometown:
            lines.append(NO_HOMETOWN_MESSAGE)
        elif forecast:
            lines.append(f"Forecast for {self.search_query or self.hometown}")
            lines.append(forecast_frame(forecast).to_string(index=False))
        return '\n'.join(lines)
