"""Session repository: quiz attempts, replays and cached explanations.

Sessions are stored as a JSON document plus the few columns that need
indexing (topic_id, timestamp, is_sample). The integer id comes from
SQLite's AUTOINCREMENT counter, so ids are never reused even after the
highest row is deleted.
"""
import json
import logging
import time

from quizstore.db import Store

logger = logging.getLogger(__name__)


def _row_to_session(row) -> dict:
    session = json.loads(row["data"])
    session["id"] = row["id"]
    return session


def _columns(session: dict) -> tuple:
    data = {k: v for k, v in session.items() if k != "id"}
    return (
        session.get("topic_id"),
        session.get("timestamp"),
        1 if session.get("is_sample") else 0,
        json.dumps(data),
    )


def now_millis() -> int:
    return int(time.time() * 1000)


def save_session(store: Store, session: dict) -> int:
    """Persist a new session and return its assigned id."""
    conn = store.connection()
    with conn:
        cursor = conn.execute(
            "INSERT INTO sessions (topic_id, timestamp, is_sample, data) VALUES (?, ?, ?, ?)",
            _columns(session),
        )
    return cursor.lastrowid


def _put_session(store: Store, session: dict) -> None:
    conn = store.connection()
    with conn:
        conn.execute(
            "UPDATE sessions SET topic_id=?, timestamp=?, is_sample=?, data=? WHERE id=?",
            (*_columns(session), session["id"]),
        )


def get_session(store: Store, session_id: int) -> dict | None:
    row = store.connection().execute(
        "SELECT id, data FROM sessions WHERE id = ?", (session_id,)
    ).fetchone()
    return _row_to_session(row) if row else None


def get_all_sessions(store: Store) -> list[dict]:
    rows = store.connection().execute("SELECT id, data FROM sessions ORDER BY id").fetchall()
    return [_row_to_session(r) for r in rows]


def get_sessions_by_topic(store: Store, topic_id: str) -> list[dict]:
    rows = store.connection().execute(
        "SELECT id, data FROM sessions WHERE topic_id = ? ORDER BY id", (topic_id,)
    ).fetchall()
    return [_row_to_session(r) for r in rows]


def get_recent_sessions(store: Store, limit: int = 10) -> list[dict]:
    """Most recent sessions first; equal timestamps fall back to newest id."""
    rows = store.connection().execute(
        "SELECT id, data FROM sessions ORDER BY timestamp DESC, id DESC LIMIT ?",
        (max(limit, 0),),
    ).fetchall()
    return [_row_to_session(r) for r in rows]


def update_session(store: Store, session_id: int, updates: dict) -> dict | None:
    """Shallow-merge updates into an existing session.

    Returns the merged session, or None without writing anything if the
    session does not exist. The id is never changed.
    """
    session = get_session(store, session_id)
    if session is None:
        return None
    updated = {**session, **updates, "id": session["id"]}
    _put_session(store, updated)
    return updated


def update_question_explanation(
    store: Store, session_id: int, question_index: int, explanation: str
) -> dict | None:
    """Cache a right-answer explanation on one question of a session."""
    session = get_session(store, session_id)
    if session is None:
        return None
    questions = session.get("questions")
    if not isinstance(questions, list):
        return None
    if question_index < 0 or question_index >= len(questions):
        return None

    new_questions = list(questions)
    new_questions[question_index] = {
        **questions[question_index],
        "right_answer_explanation": explanation,
    }
    session["questions"] = new_questions
    _put_session(store, session)
    return session


def delete_sample_sessions(store: Store) -> int:
    """Delete every sample session. Returns how many were removed."""
    conn = store.connection()
    with conn:
        cursor = conn.execute("DELETE FROM sessions WHERE is_sample = 1")
    if cursor.rowcount:
        logger.debug("Deleted %d sample sessions", cursor.rowcount)
    return cursor.rowcount


def is_replayable(session: dict | None) -> bool:
    """A session can be replayed only if it still carries its questions."""
    return bool(session) and bool(session.get("questions"))


def replay_session(
    store: Store, session_id: int, answers: list, score: int, timestamp: int | None = None
) -> dict | None:
    """Record a replay on an existing session instead of creating a new one.

    Returns None when the session is missing or has no questions to replay.
    """
    session = get_session(store, session_id)
    if not is_replayable(session):
        logger.warning("Session %s cannot be replayed", session_id)
        return None
    return update_session(store, session_id, {
        "answers": answers,
        "score": score,
        "timestamp": timestamp if timestamp is not None else now_millis(),
    })
