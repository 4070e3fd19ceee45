"""Environment-driven configuration.

QUIZSTORE_HOME        data directory (default ~/.quizstore)
QUIZSTORE_LOG_LEVEL   root log level (default WARNING)
QUIZSTORE_LOG_FORMAT  "text" or "json" (default text)
"""
import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("QUIZSTORE_HOME", str(Path.home() / ".quizstore")))

DEFAULT_DB_PATH = str(DATA_DIR / "quizstore.db")
LOCAL_STORAGE_PATH = str(DATA_DIR / "local_storage.json")

LOG_LEVEL = os.environ.get("QUIZSTORE_LOG_LEVEL", "WARNING")
LOG_FORMAT = os.environ.get("QUIZSTORE_LOG_FORMAT", "text")
