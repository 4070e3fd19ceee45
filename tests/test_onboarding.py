from quizstore.onboarding import WELCOME_VERSION_KEY, mark_welcome_seen, should_show_welcome
from quizstore.settings import save_setting


def test_show_welcome_on_first_run(store):
    assert should_show_welcome(store) is True


def test_hide_welcome_after_seen(store):
    mark_welcome_seen(store)
    assert should_show_welcome(store) is False


def test_show_welcome_again_for_other_version(store):
    save_setting(store, WELCOME_VERSION_KEY, "0.9")
    assert should_show_welcome(store) is True
