"""Topic repository: keyed upserts and lookups."""
import json

from quizstore.db import Store


def _row_to_topic(row) -> dict:
    return json.loads(row["data"])


def save_topic(store: Store, topic: dict) -> None:
    """Insert or fully replace the topic with the same id."""
    conn = store.connection()
    data = json.dumps(topic)
    with conn:
        conn.execute(
            "INSERT INTO topics (id, name, data) VALUES (?, ?, ?) "
            "ON CONFLICT(id) DO UPDATE SET name=excluded.name, data=excluded.data",
            (topic["id"], topic.get("name"), data),
        )


def get_topic(store: Store, topic_id: str) -> dict | None:
    row = store.connection().execute(
        "SELECT data FROM topics WHERE id = ?", (topic_id,)
    ).fetchone()
    return _row_to_topic(row) if row else None


def get_all_topics(store: Store) -> list[dict]:
    rows = store.connection().execute("SELECT data FROM topics ORDER BY rowid").fetchall()
    return [_row_to_topic(r) for r in rows]


def get_topics_by_name(store: Store, name: str) -> list[dict]:
    rows = store.connection().execute(
        "SELECT data FROM topics WHERE name = ? ORDER BY rowid", (name,)
    ).fetchall()
    return [_row_to_topic(r) for r in rows]


def delete_topic(store: Store, topic_id: str) -> bool:
    """Delete one topic. Returns False if there was nothing to delete."""
    conn = store.connection()
    with conn:
        cursor = conn.execute("DELETE FROM topics WHERE id = ?", (topic_id,))
    return cursor.rowcount > 0
