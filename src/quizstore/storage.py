"""Storage usage estimates for the settings screen."""
import json
import math

from quizstore.db import Store
from quizstore.models import StorageBreakdown
from quizstore.onboarding import WELCOME_VERSION_KEY
from quizstore.sessions import get_all_sessions
from quizstore.settings import OPENROUTER_KEY, get_setting
from quizstore.sidechannel import LOCAL_STORAGE_KEYS, MemoryStore
from quizstore.topics import get_all_topics

UNITS = ("B", "KB", "MB", "GB")


def format_storage_size(num_bytes: float) -> str:
    """Format a byte count as e.g. "512 B", "1.5 KB", "2.3 MB".

    Zero, negative, NaN and infinite inputs all give "0 B".
    """
    if not isinstance(num_bytes, (int, float)) or not math.isfinite(num_bytes) or num_bytes <= 0:
        return "0 B"
    size = num_bytes
    i = 0
    while size >= 1024 and i < len(UNITS) - 1:
        size /= 1024
        i += 1
    decimals = 0 if i == 0 else 1
    return f"{size:.{decimals}f} {UNITS[i]}"


def json_size(value) -> int:
    """Size in bytes of a value serialized as compact UTF-8 JSON."""
    return len(json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def get_storage_breakdown(store: Store, local_storage: MemoryStore) -> StorageBreakdown:
    settings_bytes = 0
    for key in (OPENROUTER_KEY, WELCOME_VERSION_KEY):
        value = get_setting(store, key, None)
        if value is not None:
            settings_bytes += json_size(value)
    for key in LOCAL_STORAGE_KEYS:
        value = local_storage.get_item(key)
        if value:
            settings_bytes += len(value.encode("utf-8"))

    quizzes_bytes = json_size(get_all_sessions(store)) + json_size(get_all_topics(store))

    total_bytes = settings_bytes + quizzes_bytes
    return StorageBreakdown(
        settings=format_storage_size(settings_bytes),
        quizzes=format_storage_size(quizzes_bytes),
        total=format_storage_size(total_bytes),
        settings_bytes=settings_bytes,
        quizzes_bytes=quizzes_bytes,
        total_bytes=total_bytes,
    )
