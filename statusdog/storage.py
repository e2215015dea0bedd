# statusdog/storage.py
"""
JSON-file key/value store standing in for the browser's localStorage.

Keys used by the application: ``token``, ``savedList``, ``tempList``.
Two processes sharing the same file may overwrite each other's writes.
"""

import json
import logging
import os
from typing import Any, Callable

from .errors import StorageError

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
SAVED_LIST_KEY = "savedList"
TEMP_LIST_KEY = "tempList"


class LocalStorage:
    def __init__(self, path: str):
        self.path = path

    def _ensure_dir(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Local storage file {self.path} is not valid JSON, ignoring it: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Cannot read local storage {self.path}: {e}") from e
        if not isinstance(data, dict):
            logger.warning(f"Local storage file {self.path} does not hold an object, ignoring it.")
            return {}
        return data

    def _dump(self, data: dict):
        try:
            payload = json.dumps(data, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Value is not JSON serializable: {e}") from e
        tmp_path = f"{self.path}.tmp"
        try:
            self._ensure_dir()
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write local storage {self.path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        try:
            data = self._load()
        except StorageError as e:
            logger.warning(str(e))
            return default
        return data.get(key, default)

    def set(self, key: str, value: Any):
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str):
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def writer(self, key: str) -> Callable[[Any], bool]:
        """
        Returns the persistence listener for `key`.
        A failed write is logged as a warning and reported through the return value; it never raises.
        """
        def write(value: Any) -> bool:
            try:
                self.set(key, value)
                return True
            except StorageError as e:
                logger.warning(f"Could not persist '{key}': {e}")
                return False
        return write
