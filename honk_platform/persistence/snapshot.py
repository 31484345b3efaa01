"""Snapshot persistence: bridge from the in-memory store to the blob store.

Every call re-serializes the entire store; there is no incremental write.
A failed write leaves the in-memory store untouched and is retried in full by
the next ``persist()``.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3

from honk_platform.errors import StorageUnavailableError
from honk_platform.runtime.config import DB_KEY

from .blob_store import BlobStore
from .database import export_image

logger = logging.getLogger(__name__)


class SnapshotPersister:
    """Write the database image through a blob store after each mutation."""

    def __init__(self, conn: sqlite3.Connection, blob_store: BlobStore, *,
                 key: str = DB_KEY):
        self.conn = conn
        self.blob_store = blob_store
        self.key = key
        self.last_error: StorageUnavailableError | None = None
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    async def persist(self) -> bool:
        """Serialize the store and overwrite the stored image.

        Returns False when the blob store rejected the write. The failure is
        logged and kept on ``last_error``; it is never raised.
        """
        async with self._lock:
            # Taken under the lock so the last write carries the newest state.
            image = export_image(self.conn)
            try:
                await self.blob_store.set(self.key, image)
            except StorageUnavailableError as e:
                logger.warning("Snapshot write failed (%d bytes): %s", len(image), e)
                self.last_error = e
                return False

        self.last_error = None
        logger.debug("Snapshot written: %d bytes under %s", len(image), self.key)
        return True

    def flush_in_background(self) -> asyncio.Task | None:
        """Schedule a best-effort flush without waiting for it.

        Meant for visibility-loss signals. The write may be lost if the
        process terminates before it completes. Returns None when no event
        loop is running.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; background flush skipped")
            return None

        task = loop.create_task(self.persist())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    async def drain(self) -> None:
        """Wait for outstanding background flushes to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending))


__all__ = ["SnapshotPersister"]
