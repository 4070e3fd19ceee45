"""Deleting all user data across every storage location."""
import logging

from quizstore.db import Store, clear_all_user_data
from quizstore.models import SampleBundle
from quizstore.samples import load_samples_if_needed
from quizstore.sidechannel import LOCAL_STORAGE_KEYS, SESSION_STORAGE_KEYS, MemoryStore
from quizstore.state import AppState

logger = logging.getLogger(__name__)


def delete_all_user_data(
    store: Store,
    app_state: AppState,
    local_storage: MemoryStore,
    session_storage: MemoryStore,
    bundle: SampleBundle | None = None,
) -> None:
    """Wipe user data, then reload the sample quizzes so the app stays usable.

    Steps run strictly in order: database, local storage, session storage,
    in-memory state, samples. Any failure is logged and re-raised, and the
    remaining steps are not run.
    """
    logger.info("Starting data deletion")
    try:
        logger.debug("Clearing database")
        clear_all_user_data(store)

        logger.debug("Clearing local storage")
        for key in LOCAL_STORAGE_KEYS:
            local_storage.remove_item(key)

        logger.debug("Clearing session storage")
        for key in SESSION_STORAGE_KEYS:
            session_storage.remove_item(key)

        logger.debug("Resetting in-memory state")
        app_state.clear()

        logger.debug("Reloading sample quizzes")
        load_samples_if_needed(store, bundle)
    except Exception as e:
        logger.error("Data deletion failed: %s", e)
        raise
    logger.info("Data deletion complete")
