from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from weatherclient.client import WeatherClient
from weatherclient.config import WeatherSettings
from weatherclient.models import ForecastEntry, ForecastRecord, WeatherRecord
from weatherclient.outcome import Success

from .observable import ObservableField

WEATHER_ERROR = "Failed to fetch weather. Please check your API key or city name."
FORECAST_ERROR = "Failed to fetch forecast. Please check your API key or city name."


@dataclass(frozen=True)
class PresentationState:
    current_weather: Optional[WeatherRecord]
    forecast: Tuple[ForecastEntry, ...]
    icon_url: Optional[str]
    error_message: Optional[str]


class WeatherPresenter:
    """
    Holds the observable weather state for a UI session.

    ``load_weather`` and ``load_forecast`` return immediately with a Future;
    the network call runs on the executor and its result is written to the
    observable fields on completion. Overlapping calls are independent and
    the last one to complete wins, unless ``discard_stale`` is set, in which
    case only the most recently issued call of each command is applied.
    """

    def __init__(self, client: WeatherClient, settings: WeatherSettings | None = None,
                 executor: Executor | None = None, discard_stale: bool | None = None):
        self.client = client
        self.settings = settings or client.settings
        self.discard_stale = self.settings.discard_stale if discard_stale is None else discard_stale
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix='weather-fetch')
        self._log = logging.getLogger(__name__)

        self.current_weather: ObservableField[Optional[WeatherRecord]] = ObservableField(None)
        self.forecast: ObservableField[Tuple[ForecastEntry, ...]] = ObservableField(())
        self.icon_url: ObservableField[Optional[str]] = ObservableField(None)
        self.error_message: ObservableField[Optional[str]] = ObservableField(None)

        # reentrant: a subscriber may issue a new command while a result is applied
        self._seq_lock = threading.RLock()
        self._latest: Dict[str, int] = {'weather': 0, 'forecast': 0}

    def state(self) -> PresentationState:
        return PresentationState(
            current_weather=self.current_weather.value,
            forecast=self.forecast.value,
            icon_url=self.icon_url.value,
            error_message=self.error_message.value,
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # ---------------- Commands -----------------
    def load_weather(self, city: str, api_key: str) -> Future:
        """Fetch current weather for city in the background and update state."""
        seq = self._issue('weather')
        return self._executor.submit(self._run_weather, city, api_key, seq)

    def load_forecast(self, city: str, api_key: str) -> Future:
        """Fetch the forecast for city in the background and replace the forecast list."""
        seq = self._issue('forecast')
        return self._executor.submit(self._run_forecast, city, api_key, seq)

    # ---------------- Internal Helpers -----------------
    def _issue(self, command: str) -> int:
        with self._seq_lock:
            self._latest[command] += 1
            return self._latest[command]

    def _complete(self, command: str, seq: int, apply: Callable[[], None]) -> None:
        # check and write under one lock so a newer call cannot land in between
        with self._seq_lock:
            if self.discard_stale and seq != self._latest[command]:
                self._log.debug("Discarding stale %s result (request %s, latest %s)",
                                command, seq, self._latest[command])
                return
            apply()

    def _run_weather(self, city: str, api_key: str, seq: int) -> None:
        try:
            outcome = self.client.fetch_current(city, api_key, self.settings.units)
        except Exception as e:  # noqa: BLE001
            self._log.exception("Unexpected error loading weather for %r", city)
            message = f"An error occurred: {e}"
            self._complete('weather', seq, lambda: self.error_message.set(message))
            return
        if isinstance(outcome, Success):
            self._complete('weather', seq, lambda: self._apply_weather(outcome.value))
        else:
            self._complete('weather', seq, lambda: self.error_message.set(WEATHER_ERROR))

    def _run_forecast(self, city: str, api_key: str, seq: int) -> None:
        try:
            outcome = self.client.fetch_forecast(city, api_key, self.settings.units)
        except Exception as e:  # noqa: BLE001
            self._log.exception("Unexpected error loading forecast for %r", city)
            message = f"An error occurred: {e}"
            self._complete('forecast', seq, lambda: self.error_message.set(message))
            return
        if isinstance(outcome, Success):
            self._complete('forecast', seq, lambda: self._apply_forecast(outcome.value))
        else:
            self._complete('forecast', seq, lambda: self.error_message.set(FORECAST_ERROR))

    def _apply_weather(self, record: WeatherRecord) -> None:
        self.current_weather.set(record)
        # icon only changes when the record carries a descriptor with an icon code
        if record.conditions and record.conditions[0].icon:
            self.icon_url.set(self.settings.icon_url(record.conditions[0].icon))
        self.error_message.set(None)

    def _apply_forecast(self, record: ForecastRecord) -> None:
        self.forecast.set(record.entries)
        self.error_message.set(None)
