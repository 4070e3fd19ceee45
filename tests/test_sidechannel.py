import json

from quizstore.sidechannel import LOCAL_STORAGE_KEYS, SESSION_STORAGE_KEYS, JsonFileStore, MemoryStore


def test_cleared_key_lists_are_exact():
    assert LOCAL_STORAGE_KEYS == (
        "quizmaster_settings",
        "openrouter_models_cache",
        "i18nextLng",
        "saberloop_telemetry_queue",
    )
    assert SESSION_STORAGE_KEYS == ("openrouter_code_verifier",)


def test_memory_store():
    s = MemoryStore()
    assert s.get_item("a") is None
    s.set_item("a", "1")
    assert s.get_item("a") == "1"
    assert s.keys() == ["a"]
    s.remove_item("a")
    s.remove_item("a")
    assert s.get_item("a") is None


def test_memory_store_stringifies_values():
    s = MemoryStore()
    s.set_item("n", 5)
    assert s.get_item("n") == "5"


def test_json_file_store_persists(tmp_path):
    path = tmp_path / "nested" / "local.json"
    s = JsonFileStore(str(path))
    s.set_item("i18nextLng", "pt")
    assert json.loads(path.read_text()) == {"i18nextLng": "pt"}

    reopened = JsonFileStore(str(path))
    assert reopened.get_item("i18nextLng") == "pt"
    reopened.remove_item("i18nextLng")
    assert JsonFileStore(str(path)).get_item("i18nextLng") is None


def test_json_file_store_missing_file(tmp_path):
    s = JsonFileStore(str(tmp_path / "none.json"))
    assert s.keys() == []
    s.remove_item("x")
    assert not (tmp_path / "none.json").exists()


def test_json_file_store_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json")
    s = JsonFileStore(str(path))
    assert s.keys() == []
    assert s.get_item("i18nextLng") is None
    s.set_item("i18nextLng", "en")
    assert json.loads(path.read_text()) == {"i18nextLng": "en"}


def test_json_file_store_non_object_file_starts_empty(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("[1, 2]")
    s = JsonFileStore(str(path))
    assert s.get_item("i18nextLng") is None
    assert s.keys() == []
