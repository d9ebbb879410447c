"""Key/value text store persisted as a single JSON file."""

import json
import logging
import os

from ramazon.config import STORAGE_FILE

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Small synchronous key/value store: every key maps to a text value.

    The whole mapping is rewritten on each set/remove, so a value is on disk
    before the call returns.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        self.path = os.path.join(data_dir, STORAGE_FILE)
        self._items = self._read()

    def _read(self) -> dict:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Discarding unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding store %s: not a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        """Rewrite the file. A failed write is logged; the in-memory value stays."""
        tmp_path = self.path + ".tmp"
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.warning("Could not write store %s: %s", self.path, exc)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._write()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._write()
