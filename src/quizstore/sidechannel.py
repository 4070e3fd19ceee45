"""Key/value stores that live outside the main database.

JsonFileStore plays the role of the host's persistent local storage and
MemoryStore the role of its per-session storage. Values are strings.
"""
import json
import logging
from pathlib import Path

from quizstore.config import LOCAL_STORAGE_PATH

logger = logging.getLogger(__name__)

# Keys this app writes to persistent local storage.
LOCAL_STORAGE_KEYS = (
    "quizmaster_settings",
    "openrouter_models_cache",
    "i18nextLng",
    "saberloop_telemetry_queue",
)

# Keys this app writes to session storage.
SESSION_STORAGE_KEYS = (
    "openrouter_code_verifier",
)


class MemoryStore:
    def __init__(self):
        self._items = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStore(MemoryStore):
    """MemoryStore that is written through to a JSON file on every change."""

    def __init__(self, path: str = LOCAL_STORAGE_PATH):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._items = self._load()

    def _load(self) -> dict:
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            logger.error("Unreadable local storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Local storage file %s does not hold an object", self.path)
            return {}
        return data

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items, indent=2))

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._flush()

    def remove_item(self, key: str) -> None:
        if key in self._items:
            super().remove_item(key)
            self._flush()
