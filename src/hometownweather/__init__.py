"""Public facade for the hometown weather packages.

The implementation lives under ``weatherclient``, ``weatherpresenter`` and
``prefsclient``; this package re-exports the public symbols and wires a
presenter from environment settings.
"""

from __future__ import annotations

from weatherclient import (  # noqa: F401
    ConditionDescriptor, DecodeFailure, Failure, ForecastEntry, ForecastRecord, HttpStatusFailure,
    Success, TransportFailure, WeatherClient, WeatherError, WeatherRecord, WeatherSettings,
)
from weatherpresenter import ForecastView, ObservableField, PresentationState, WeatherPresenter  # noqa: F401
from prefsclient import EnvPreferences, PreferencesStore, PrefsConfig, open_preferences  # noqa: F401


def build_presenter(settings: WeatherSettings | None = None) -> WeatherPresenter:
    """Create a presenter with its own client, configured from the environment by default."""
    settings = settings or WeatherSettings.from_env()
    return WeatherPresenter(WeatherClient(settings), settings)


__all__ = [
    'WeatherClient', 'WeatherSettings', 'WeatherRecord', 'ForecastRecord', 'ForecastEntry',
    'ConditionDescriptor', 'Success', 'Failure', 'WeatherError', 'TransportFailure',
    'HttpStatusFailure', 'DecodeFailure', 'WeatherPresenter', 'PresentationState',
    'ObservableField', 'ForecastView', 'PreferencesStore', 'EnvPreferences', 'PrefsConfig',
    'open_preferences', 'build_presenter',
]
