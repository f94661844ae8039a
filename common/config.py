"""Creditor and initiating-party defaults for direct-debit batches.

Settings live in a JSON file pointed to by ``SEPA_CONFIG_PATH``::

    {
      "initiating_party_name": "ACME GmbH",
      "creditor": {"name": "ACME GmbH", "iban": "DE89...", "bic": "COBADEFFXXX"},
      "creditor_scheme_id": "DE98ZZZ09999999999",
      "schema": "pain.008.001.02"
    }
"""
import json
import os
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONFIG_PATH = "/etc/sepa/direct_debit.json"


class Settings:
    """Load settings from a JSON file, cached on first access.

    Tests may replace or patch the in-memory cache via :meth:`set_override`
    or :meth:`update`.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path or os.getenv("SEPA_CONFIG_PATH", DEFAULT_CONFIG_PATH))
        self._cache: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._cache is None:
            try:
                with self._path.open("r", encoding="utf-8") as fh:
                    self._cache = json.load(fh)
            except FileNotFoundError:
                self._cache = {}
        return self._cache

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Return the value for *key* or *default* if missing or null."""

        value = self._load().get(key)
        return default if value is None else value

    def set_override(self, data: dict[str, Any]) -> None:
        """Replace the entire settings cache (test helper)."""

        self._cache = dict(data)

    def update(self, data: dict[str, Any]) -> None:
        """Merge *data* into the existing cache (test helper)."""

        current = self._load()
        current.update(data)
        self._cache = current


# Global default settings
settings = Settings()
