"""
Observable weather state and the headless forecast screen built on it.
"""

__all__ = ['WeatherPresenter', 'PresentationState', 'ObservableField', 'ForecastView']

from .observable import ObservableField
from .presenter import PresentationState, WeatherPresenter
from .view import ForecastView
