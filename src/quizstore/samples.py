"""Seed the store with the bundled sample quizzes."""
import json
import logging
import sqlite3
from pathlib import Path

from quizstore.db import Store
from quizstore.models import SampleBundle, SampleLoadResult, SampleQuiz
from quizstore.sessions import delete_sample_sessions, save_session
from quizstore.settings import get_setting, save_setting

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"
SAMPLES_VERSION_KEY = "samplesVersion"


def load_bundle(path: Path = CONTENT_DIR / "sample_quizzes.json") -> SampleBundle:
    """Read a sample bundle from sample_quizzes.json."""
    data = json.loads(Path(path).read_text())
    samples = [
        SampleQuiz(
            topic=s["topic"],
            grade_level=s["grade_level"],
            total_questions=s["total_questions"],
            questions=s["questions"],
        )
        for s in data["samples"]
    ]
    return SampleBundle(version=data["version"], samples=samples)


def sample_to_session(sample: SampleQuiz) -> dict:
    # timestamp 0 sorts samples after every real attempt
    return {
        "topic": sample.topic,
        "grade_level": sample.grade_level,
        "total_questions": sample.total_questions,
        "questions": sample.questions,
        "is_sample": True,
        "answers": None,
        "score": None,
        "timestamp": 0,
    }


def load_samples_if_needed(store: Store, bundle: SampleBundle | None = None) -> SampleLoadResult:
    """Replace the stored sample sessions when the bundle version changed.

    Old samples are deleted, new ones inserted, and only then is the version
    stamped, so an interrupted load is simply redone on the next start. A
    sample that fails to insert is logged and skipped.
    """
    if bundle is None:
        bundle = load_bundle()

    stored_version = get_setting(store, SAMPLES_VERSION_KEY)
    if stored_version == bundle.version:
        logger.debug("Samples already loaded, version %s", stored_version)
        return SampleLoadResult(version=bundle.version, skipped=True)

    logger.info("Loading samples, version %s", bundle.version)
    result = SampleLoadResult(version=bundle.version)
    delete_sample_sessions(store)

    for sample in bundle.samples:
        try:
            session_id = save_session(store, sample_to_session(sample))
        except (sqlite3.Error, TypeError, ValueError):
            logger.exception("Failed to load sample %r", sample.topic)
            result.failed.append(sample.topic)
            continue
        logger.debug("Loaded sample %r as session %d", sample.topic, session_id)
        result.loaded.append(session_id)

    save_setting(store, SAMPLES_VERSION_KEY, bundle.version)
    logger.info("Loaded %d samples (%d failed)", len(result.loaded), len(result.failed))
    return result
