"""Entity store adapters and the factory that picks one from settings."""

import logging

from coursehub.config import DataBackend, Settings
from coursehub.ports.entity_store import EntityStorePort

logger = logging.getLogger(__name__)


def build_entity_store(settings: Settings) -> EntityStorePort:
    """Instantiate the configured backend. Imports are lazy so unused SDKs stay unloaded."""
    logger.info("Data backend: %s", settings.data_backend.value)
    if settings.data_backend == DataBackend.FIRESTORE:
        from coursehub.adapters.store.firestore import FirestoreStoreAdapter

        return FirestoreStoreAdapter(project=settings.firestore_project)

    if settings.data_backend == DataBackend.SQL:
        from coursehub.adapters.store.sql import SqlStoreAdapter
        from coursehub.database import build_engine

        return SqlStoreAdapter(build_engine(settings.database_url))

    from coursehub.adapters.store.local import LocalJsonStoreAdapter

    seed = settings.seed_path if settings.seed_courses else None
    return LocalJsonStoreAdapter(settings.local_data_path, seed_path=seed)
