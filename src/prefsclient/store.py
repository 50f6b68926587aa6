from __future__ import annotations

import json
import logging
import os
from typing import Dict

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.storage.blob import BlobServiceClient

from weatherclient.config import WeatherSettings

from .config import PrefsConfig

HOMETOWN_KEY = 'hometown'
API_TOKEN_KEY = 'api_key'


def build_service_client(config: PrefsConfig) -> BlobServiceClient:
    if config.connection_string:
        return BlobServiceClient.from_connection_string(config.connection_string)
    if not config.storage_account_name:
        raise ValueError("STORAGE_ACCOUNT_NAME or AZURE_STORAGE_CONNECTION_STRING must be set")
    credential = DefaultAzureCredential(exclude_interactive_browser_credential=True)
    account_url = f"https://{config.storage_account_name}.blob.core.windows.net"
    return BlobServiceClient(account_url=account_url, credential=credential)


class PreferencesStore:
    """Read-only view of the user's saved preferences (hometown, API key).

    Preferences live in a single JSON document in blob storage, e.g.
    ``{"hometown": "Berlin", "api_key": "..."}``. Values are re-read on every
    call so edits made elsewhere are picked up. The store never writes.
    """

    def __init__(self, config: PrefsConfig, service_client: BlobServiceClient | None = None,
                 default_api_key: str = ''):
        self.config = config
        self.default_api_key = default_api_key  # used when the document has no api_key
        if service_client is None:
            service_client = build_service_client(config)
        self.client = service_client.get_blob_client(container=config.container, blob=config.blob)
        self._log = logging.getLogger(__name__)

    def load(self) -> Dict[str, str]:
        try:
            data = self.client.download_blob().readall()
        except ResourceNotFoundError:
            self._log.info("No preferences document at %s/%s", self.config.container, self.config.blob)
            return {}
        except AzureError as e:
            self._log.error("Failed to read preferences: %s", e)
            return {}
        try:
            j = json.loads(data)
        except ValueError as e:
            self._log.error("Malformed preferences document: %s", e)
            return {}
        if not isinstance(j, dict):
            self._log.error("Preferences document is not a JSON object")
            return {}
        return {k: str(v) for k, v in j.items() if v is not None}

    def get_hometown(self) -> str:
        return self.load().get(HOMETOWN_KEY, '')

    def get_api_key(self) -> str:
        return self.load().get(API_TOKEN_KEY) or self.default_api_key


class EnvPreferences:
    """Hometown from the HOMETOWN environment variable; API key from WeatherSettings."""

    def __init__(self, api_key: str = ''):
        self.api_key = api_key

    def load(self) -> Dict[str, str]:
        return {
            HOMETOWN_KEY: os.environ.get('HOMETOWN', ''),
            API_TOKEN_KEY: self.api_key,
        }

    def get_hometown(self) -> str:
        return self.load()[HOMETOWN_KEY]

    def get_api_key(self) -> str:
        return self.api_key


def open_preferences(config: PrefsConfig | None = None, settings: WeatherSettings | None = None):
    """Blob-backed preferences when storage is configured, environment otherwise.

    The API key falls back to ``settings.api_key`` (WEATHER_API_KEY) in both cases.
    """
    config = config or PrefsConfig.from_env()
    settings = settings or WeatherSettings.from_env()
    default_api_key = settings.api_key or ''
    if config.connection_string or config.storage_account_name:
        return PreferencesStore(config, default_api_key=default_api_key)
    return EnvPreferences(default_api_key)
