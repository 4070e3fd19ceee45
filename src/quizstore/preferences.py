"""User preferences kept as one JSON blob in local storage."""
import json
import logging

from quizstore.sidechannel import MemoryStore

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "quizmaster_settings"

DEFAULT_MODEL = "tngtech/deepseek-r1t2-chimera:free"

DEFAULT_PREFERENCES = {
    "default_grade_level": "middle school",
    "questions_per_quiz": 5,
    "difficulty": "mixed",
    "selected_model": DEFAULT_MODEL,
}


def get_preferences(local_storage: MemoryStore) -> dict:
    """All preferences, stored values merged over the defaults."""
    raw = local_storage.get_item(PREFERENCES_KEY)
    if raw:
        try:
            return {**DEFAULT_PREFERENCES, **json.loads(raw)}
        except (ValueError, TypeError) as e:
            logger.error("Error reading preferences: %s", e)
    return dict(DEFAULT_PREFERENCES)


def get_preference(local_storage: MemoryStore, key: str):
    return get_preferences(local_storage).get(key)


def save_preferences(local_storage: MemoryStore, updates: dict) -> None:
    prefs = {**get_preferences(local_storage), **updates}
    local_storage.set_item(PREFERENCES_KEY, json.dumps(prefs))


def save_preference(local_storage: MemoryStore, key: str, value) -> None:
    save_preferences(local_storage, {key: value})
