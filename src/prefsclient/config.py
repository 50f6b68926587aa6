from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class PrefsConfig:
    """Location of the persisted user preferences document."""
    storage_account_name: Optional[str] = None
    container: str = 'settings'
    blob: str = 'prefs/preferences.json'
    connection_string: Optional[str] = None

    @staticmethod
    def from_env() -> 'PrefsConfig':
        """Create configuration from environment variables."""
        return PrefsConfig(
            storage_account_name=os.environ.get('STORAGE_ACCOUNT_NAME'),
            container=os.environ.get('PREFS_CONTAINER', 'settings'),
            blob=os.environ.get('PREFS_BLOB', 'prefs/preferences.json'),
            connection_string=os.environ.get('AZURE_STORAGE_CONNECTION_STRING'),
        )
