"""Key/value settings and the OpenRouter credential lifecycle."""
import json
import logging
from datetime import datetime, timezone

from quizstore.db import Store

logger = logging.getLogger(__name__)

OPENROUTER_KEY = "openrouter_api_key"


class _Unset:
    """Marker for a setting that has never been saved."""

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSET"


UNSET = _Unset()


def get_setting(store: Store, key: str, default=UNSET):
    """Return the stored value, or `default` (UNSET) if the key was never saved.

    A value explicitly saved as None comes back as None, so callers can tell
    "never set" apart from "cleared".
    """
    row = store.connection().execute(
        "SELECT value FROM settings WHERE key = ?", (key,)
    ).fetchone()
    if row is None:
        return default
    return json.loads(row["value"])


def save_setting(store: Store, key: str, value) -> None:
    conn = store.connection()
    data = json.dumps(value)
    with conn:
        conn.execute(
            "INSERT INTO settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
            (key, data, data),
        )


def delete_setting(store: Store, key: str) -> None:
    conn = store.connection()
    with conn:
        conn.execute("DELETE FROM settings WHERE key = ?", (key,))


def store_openrouter_key(store: Store, api_key: str) -> None:
    """Save the API key along with the time it was captured."""
    save_setting(store, OPENROUTER_KEY, {
        "key": api_key,
        "stored_at": datetime.now(timezone.utc).isoformat(),
    })
    logger.info("OpenRouter key stored")


def get_openrouter_key(store: Store) -> str | None:
    data = get_setting(store, OPENROUTER_KEY)
    if not isinstance(data, dict):
        return None
    return data.get("key") or None


def remove_openrouter_key(store: Store) -> None:
    delete_setting(store, OPENROUTER_KEY)
    logger.info("OpenRouter key removed")


def is_openrouter_connected(store: Store) -> bool:
    return get_openrouter_key(store) is not None
