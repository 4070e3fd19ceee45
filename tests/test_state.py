from unittest.mock import Mock

from quizstore.state import AppState

QUESTIONS = [
    {"question": "What is 2+2?"},
    {"question": "What is the capital of France?"},
]


def test_default_values():
    state = AppState()
    assert state.get("current_topic") is None
    assert state.get("current_grade_level") == "middle school"
    assert state.get("current_answers") == []


def test_get_unknown_key_returns_none():
    assert AppState().get("no_such_key") is None


def test_set_notifies_subscribers():
    state = AppState()
    callback = Mock()
    state.subscribe(callback)
    state.set("current_topic", "Math")
    assert state.get("current_topic") == "Math"
    callback.assert_called_once_with("current_topic", "Math")


def test_update_notifies_with_wildcard():
    state = AppState()
    callback = Mock()
    state.subscribe(callback)
    state.update({"current_topic": "History", "current_score": 85})
    assert state.get("current_score") == 85
    key, data = callback.call_args[0]
    assert key == "*"
    assert data["current_topic"] == "History"


def test_unsubscribe_stops_notifications():
    state = AppState()
    first, second = Mock(), Mock()
    unsubscribe = state.subscribe(first)
    state.subscribe(second)
    unsubscribe()
    unsubscribe()  # second call is harmless
    state.set("current_topic", "Art")
    first.assert_not_called()
    second.assert_called_once()


def test_clear_resets_defaults_and_notifies():
    state = AppState()
    callback = Mock()
    state.set("current_topic", "Physics")
    state.set("current_score", 90)
    state.subscribe(callback)
    state.clear()
    assert state.get("current_topic") is None
    assert state.get("current_score") is None
    assert state.get("current_grade_level") == "middle school"
    assert callback.call_args[0][0] == "*"


def test_clear_discards_continue_chain():
    state = AppState()
    state.init_continue_chain("Math", "high school", QUESTIONS)
    state.clear()
    assert state.get_continue_chain() is None


def test_init_continue_chain():
    state = AppState()
    state.init_continue_chain("Math", "high school", QUESTIONS)
    chain = state.get_continue_chain()
    assert chain.topic == "Math"
    assert chain.starting_grade_level == "high school"
    assert chain.continue_count == 0
    assert chain.previous_questions == ["What is 2+2?", "What is the capital of France?"]


def test_add_to_continue_chain():
    state = AppState()
    state.init_continue_chain("Math", "high school", QUESTIONS)
    state.add_to_continue_chain([{"question": "What is 3+3?"}])
    chain = state.get_continue_chain()
    assert chain.continue_count == 1
    assert chain.previous_questions[-1] == "What is 3+3?"
    assert len(chain.previous_questions) == 3


def test_add_without_chain_is_noop():
    state = AppState()
    state.add_to_continue_chain([{"question": "Test?"}])
    assert state.get_continue_chain() is None


def test_clear_continue_chain():
    state = AppState()
    state.init_continue_chain("Math", "high school", QUESTIONS)
    state.clear_continue_chain()
    assert state.get_continue_chain() is None


def test_chain_snapshot_is_a_copy():
    state = AppState()
    state.init_continue_chain("Math", "high school", QUESTIONS)
    snapshot = state.get_continue_chain()
    snapshot.previous_questions.append("tampered")
    snapshot.continue_count = 99
    chain = state.get_continue_chain()
    assert chain.continue_count == 0
    assert "tampered" not in chain.previous_questions


def test_next_grade_level_follows_chain():
    state = AppState()
    assert state.next_grade_level() == "middle school"
    state.init_continue_chain("Math", "elementary", QUESTIONS)
    assert state.next_grade_level() == "elementary"
    state.add_to_continue_chain(QUESTIONS)
    state.add_to_continue_chain(QUESTIONS)
    assert state.next_grade_level() == "middle school"
