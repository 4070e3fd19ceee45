"""Welcome screen gating."""
from quizstore.db import Store
from quizstore.settings import get_setting, save_setting

WELCOME_VERSION_KEY = "welcomeScreenVersion"

# Bump to show the welcome screen again, e.g. to announce new features.
WELCOME_SCREEN_VERSION = "1.0"


def should_show_welcome(store: Store) -> bool:
    return get_setting(store, WELCOME_VERSION_KEY) != WELCOME_SCREEN_VERSION


def mark_welcome_seen(store: Store) -> None:
    save_setting(store, WELCOME_VERSION_KEY, WELCOME_SCREEN_VERSION)
