"""Platform-owned destructive reset of the local database."""

import logging
import sqlite3

from honk_platform.persistence import SnapshotPersister, rebuild_schema

logger = logging.getLogger(__name__)


async def reset_database(conn: sqlite3.Connection, persister: SnapshotPersister) -> bool:
    """Drop all plates and votes, recreate the empty schema, and persist.

    Irreversible. The snapshot write runs unconditionally so the stored
    image is replaced by the empty one; returns whether that write landed.
    """
    rebuild_schema(conn)
    persisted = await persister.persist()
    logger.info("Local database reset (persisted=%s)", persisted)
    return persisted
