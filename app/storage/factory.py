"""REPLYDESK — Storage Backend Selection."""

from typing import Tuple

from app.config import Settings
from app.core.errors import PersistenceError
from app.core.logging import get_logger
from app.storage.base import ConfigurationStore, ResponseStore

logger = get_logger("storage")

BACKENDS = ("file", "memory", "database")


def build_stores(settings: Settings) -> Tuple[ConfigurationStore, ResponseStore]:
    """Create the configuration and response stores for STORAGE_BACKEND.

    A fresh configuration store is seeded with the sample configuration.
    """
    backend = settings.storage_backend.lower()

    if backend == "memory":
        from app.storage.memory import MemoryConfigurationStore, MemoryResponseStore

        logger.info("🧠 Storage backend: memory")
        return MemoryConfigurationStore(), MemoryResponseStore()

    if backend == "file":
        from app.storage.file import FileConfigurationStore, FileResponseStore

        logger.info(f"🗂️  Storage backend: file ({settings.data_path})")
        return (
            FileConfigurationStore(settings.data_path),
            FileResponseStore(settings.data_path),
        )

    if backend == "database":
        from app.database import create_db_engine, init_db, test_connection
        from app.storage.database import (
            DatabaseConfigurationStore,
            DatabaseResponseStore,
        )

        engine = create_db_engine(settings.effective_database_url)
        if not test_connection(engine):
            raise PersistenceError("Database not reachable; check DATABASE_URL")
        init_db(engine)
        return DatabaseConfigurationStore(engine), DatabaseResponseStore(engine)

    raise ValueError(
        f"Unknown storage backend: {settings.storage_backend}. "
        f"Expected one of: {', '.join(BACKENDS)}."
    )
