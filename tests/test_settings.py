from datetime import datetime

from quizstore.settings import (
    OPENROUTER_KEY, UNSET, delete_setting, get_openrouter_key, get_setting,
    is_openrouter_connected, remove_openrouter_key, save_setting, store_openrouter_key,
)


def test_save_and_get_setting(store):
    save_setting(store, "theme", "dark")
    assert get_setting(store, "theme") == "dark"


def test_missing_setting_returns_unset(store):
    value = get_setting(store, "never_saved")
    assert value is UNSET
    assert not value


def test_missing_setting_uses_default(store):
    assert get_setting(store, "never_saved", "fallback") == "fallback"


def test_none_is_distinct_from_unset(store):
    save_setting(store, "cleared", None)
    assert get_setting(store, "cleared") is None


def test_update_existing_setting(store):
    save_setting(store, "count", 1)
    save_setting(store, "count", 2)
    assert get_setting(store, "count") == 2


def test_store_different_setting_types(store):
    save_setting(store, "number", 42)
    save_setting(store, "flag", True)
    save_setting(store, "obj", {"a": [1, 2], "b": None})
    assert get_setting(store, "number") == 42
    assert get_setting(store, "flag") is True
    assert get_setting(store, "obj") == {"a": [1, 2], "b": None}


def test_delete_setting(store):
    save_setting(store, "theme", "dark")
    delete_setting(store, "theme")
    assert get_setting(store, "theme") is UNSET


def test_store_and_get_openrouter_key(store):
    store_openrouter_key(store, "sk-or-test")
    assert get_openrouter_key(store) == "sk-or-test"
    assert is_openrouter_connected(store) is True


def test_openrouter_key_records_stored_at(store):
    before = datetime.now().astimezone()
    store_openrouter_key(store, "sk-or-test")
    payload = get_setting(store, OPENROUTER_KEY)
    assert payload["key"] == "sk-or-test"
    assert datetime.fromisoformat(payload["stored_at"]) >= before.replace(microsecond=0)


def test_remove_openrouter_key(store):
    store_openrouter_key(store, "sk-or-test")
    remove_openrouter_key(store)
    assert get_openrouter_key(store) is None
    assert is_openrouter_connected(store) is False
    assert get_setting(store, OPENROUTER_KEY) is UNSET


def test_not_connected_by_default(store):
    assert get_openrouter_key(store) is None
    assert is_openrouter_connected(store) is False


def test_empty_key_is_not_connected(store):
    store_openrouter_key(store, "")
    assert get_openrouter_key(store) is None
    assert is_openrouter_connected(store) is False


def test_store_new_key_overwrites(store):
    store_openrouter_key(store, "old")
    store_openrouter_key(store, "new")
    assert get_openrouter_key(store) == "new"
