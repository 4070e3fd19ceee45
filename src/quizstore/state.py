"""In-memory application state and the continue-topic chain.

Nothing here is persisted. The application root owns one AppState and
passes it to whatever needs it.
"""
import logging
from dataclasses import replace

from quizstore.models import ContinueChain
from quizstore.progression import DEFAULT_GRADE_LEVEL, calculate_next_grade_level

logger = logging.getLogger(__name__)


def _defaults() -> dict:
    return {
        "current_topic": None,
        "current_grade_level": DEFAULT_GRADE_LEVEL,
        "current_questions": None,
        "current_answers": [],
        "current_score": None,
        "last_session_id": None,
    }


def _prompts(questions) -> list[str]:
    return [q["question"] for q in questions or []]


class AppState:
    """Observable key/value state with change notifications."""

    def __init__(self):
        self.data = _defaults()
        self.continue_chain: ContinueChain | None = None
        self._listeners = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value) -> None:
        self.data[key] = value
        self._notify(key, value)

    def update(self, updates: dict) -> None:
        self.data.update(updates)
        self._notify("*", self.data)

    def subscribe(self, callback):
        """Register callback(key, value). Returns a function that unsubscribes it."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, key, value) -> None:
        for callback in list(self._listeners):
            callback(key, value)

    def clear(self) -> None:
        """Reset everything to defaults, including the continue chain."""
        self.data = _defaults()
        self.continue_chain = None
        self._notify("*", self.data)

    # Continue chain

    def init_continue_chain(self, topic: str, starting_grade_level: str, initial_questions) -> None:
        self.continue_chain = ContinueChain(
            topic=topic,
            starting_grade_level=starting_grade_level,
            previous_questions=_prompts(initial_questions),
        )

    def add_to_continue_chain(self, new_questions) -> None:
        if self.continue_chain is None:
            return
        self.continue_chain.continue_count += 1
        self.continue_chain.previous_questions.extend(_prompts(new_questions))
        logger.debug(
            "Continue chain for %r at round %d",
            self.continue_chain.topic, self.continue_chain.continue_count,
        )

    def clear_continue_chain(self) -> None:
        self.continue_chain = None

    def get_continue_chain(self) -> ContinueChain | None:
        """Snapshot of the active chain, or None if there isn't one."""
        if self.continue_chain is None:
            return None
        return replace(
            self.continue_chain,
            previous_questions=list(self.continue_chain.previous_questions),
        )

    def next_grade_level(self) -> str:
        """Grade level for the next generation, given the active chain."""
        chain = self.continue_chain
        if chain is None:
            return self.get("current_grade_level") or DEFAULT_GRADE_LEVEL
        return calculate_next_grade_level(chain.continue_count, chain.starting_grade_level)
