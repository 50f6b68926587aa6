"""
Read-only access to persisted user preferences (hometown city, API key).
"""

__all__ = ['PreferencesStore', 'EnvPreferences', 'PrefsConfig', 'open_preferences']

from .config import PrefsConfig
from .store import EnvPreferences, PreferencesStore, open_preferences
