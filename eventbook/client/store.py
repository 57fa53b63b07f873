"""
Client-side key/value store, the equivalent of a browser's local storage.

Holds `user`, `token` and `bookingData` between steps of the booking flow.
It is a convenience, not a secure or durable session.
"""

import json
import os
from typing import Any, Dict, Optional

USER_KEY = "user"
TOKEN_KEY = "token"
BOOKING_KEY = "bookingData"


class LocalStore:
    """
    JSON-backed dictionary. With no path it lives in memory only.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._data: Dict[str, Any] = {}
        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as fh:
                try:
                    self._data = json.load(fh)
                except json.JSONDecodeError:
                    # A corrupt file is treated like cleared storage
                    self._data = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data = {}
        self._flush()

    def _flush(self) -> None:
        if not self.path:
            return
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh)
        os.replace(tmp_path, self.path)
