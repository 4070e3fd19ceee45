"""Database initialization, schema upgrades and the shared store handle."""
import logging
import sqlite3
from pathlib import Path

from quizstore.config import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# Each table is created only if missing so a half-finished upgrade can be rerun.
TABLES = {
    "topics": """
        CREATE TABLE topics (
            id TEXT PRIMARY KEY,
            name TEXT,
            data TEXT NOT NULL
        )""",
    "sessions": """
        CREATE TABLE sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            topic_id TEXT,
            timestamp REAL,
            is_sample INTEGER NOT NULL DEFAULT 0,
            data TEXT NOT NULL
        )""",
    "settings": """
        CREATE TABLE settings (
            key TEXT PRIMARY KEY,
            value TEXT
        )""",
}

INDEXES = {
    "topics": [
        'CREATE INDEX IF NOT EXISTS "byName" ON topics (name)',
    ],
    "sessions": [
        'CREATE INDEX IF NOT EXISTS "byTopicId" ON sessions (topic_id)',
        'CREATE INDEX IF NOT EXISTS "byTimestamp" ON sessions (timestamp)',
    ],
    "settings": [],
}


class StoreError(Exception):
    """The store could not be opened or upgraded."""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def existing_tables(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    return {row[0] for row in rows}


def upgrade(conn: sqlite3.Connection) -> None:
    """Bring the schema up to SCHEMA_VERSION, checking each table individually."""
    present = existing_tables(conn)
    with conn:
        for name, ddl in TABLES.items():
            if name not in present:
                logger.debug("Creating table %s", name)
                conn.execute(ddl)
            for index_ddl in INDEXES[name]:
                conn.execute(index_ddl)
        if conn.execute("PRAGMA user_version").fetchone()[0] < SCHEMA_VERSION:
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")


def open_db(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open and upgrade the database. Failures are fatal and not retried."""
    conn = None
    try:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = get_connection(db_path)
        upgrade(conn)
    except (sqlite3.Error, OSError) as e:
        if conn is not None:
            conn.close()
        logger.error("Could not open store at %s: %s", db_path, e)
        raise StoreError(f"Could not open store at {db_path}: {e}") from e
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    open_db(db_path).close()


def clear_all_user_data(store: "Store") -> None:
    """Delete every non-sample session, every topic and every setting.

    Runs in a single transaction; sample sessions are left in place.
    """
    conn = store.connection()
    with conn:
        conn.execute("DELETE FROM sessions WHERE is_sample = 0")
        conn.execute("DELETE FROM topics")
        conn.execute("DELETE FROM settings")


class Store:
    """Handle to the on-disk store.

    The connection is opened on first use and reused for the lifetime of the
    handle. Construct one at application start and pass it to the repository
    functions.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        self._conn = None

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_db(self.db_path)
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
