"""Platform facade: boot, entry points and lifecycle for one local ledger."""

from __future__ import annotations

import asyncio
import logging
import sqlite3

from .errors import CorruptImageError, StorageUnavailableError
from .models import Leaderboard, LeaderboardEntry, VoteReceipt
from .persistence import BlobStore, SnapshotPersister, open_store
from .runtime.config import DB_KEY, LEADERBOARD_LIMIT
from .services import (
    ProfileStore,
    load_leaderboard,
    record_vote,
    reset_database,
    top_negative,
    top_positive,
)

logger = logging.getLogger(__name__)


class HonkFacade:
    """Owns the store handle and wires every mutation to a snapshot write.

    ``record_vote`` and ``reset`` are the only ways to change rows. Both
    persist the full image before returning; a failed write is reported on
    the result and retried by the next persist.
    """

    def __init__(self, *, conn: sqlite3.Connection, blob_store: BlobStore):
        self.conn = conn
        self.blob_store = blob_store
        self.persister = SnapshotPersister(conn, blob_store, key=DB_KEY)
        self.profiles = ProfileStore(blob_store)
        self.restored = False

    @classmethod
    async def boot(cls, blob_store: BlobStore) -> "HonkFacade":
        """Restore the store from the blob store, or start a fresh one.

        An unreadable blob store or a corrupt image is treated as "no prior
        data": the device has no other copy, so a fresh schema is created
        and persisted in its place.
        """
        try:
            saved = await blob_store.get(DB_KEY)
        except StorageUnavailableError as e:
            logger.warning("Could not read saved database, starting fresh: %s", e)
            saved = None

        if saved is not None and not isinstance(saved, (bytes, bytearray, memoryview)):
            logger.warning("Ignoring saved database of type %s", type(saved).__name__)
            saved = None

        conn = None
        if saved:
            try:
                conn = open_store(saved)
            except CorruptImageError as e:
                logger.warning("Saved database is corrupt, starting fresh: %s", e)

        if conn is not None:
            logger.info("Restored database image (%d bytes)", len(saved))
            facade = cls(conn=conn, blob_store=blob_store)
            facade.restored = True
            return facade

        logger.info("Initializing empty database")
        facade = cls(conn=open_store(), blob_store=blob_store)
        await facade.persist()
        return facade

    # -- entry points -------------------------------------------------------

    async def record_vote(self, plate_text: str, value: int) -> VoteReceipt:
        """Record a +1/-1 vote and persist the new state."""
        vote = record_vote(self.conn, plate_text, value)
        persisted = await self.persister.persist()
        return VoteReceipt(vote=vote, persisted=persisted)

    def top_positive(self, limit: int = LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
        return top_positive(self.conn, limit)

    def top_negative(self, limit: int = LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
        return top_negative(self.conn, limit)

    def leaderboard(self, limit: int = LEADERBOARD_LIMIT) -> Leaderboard:
        return load_leaderboard(self.conn, limit)

    async def reset(self) -> bool:
        """Wipe all plates and votes. Returns whether the empty image was saved."""
        return await reset_database(self.conn, self.persister)

    # -- lifecycle ----------------------------------------------------------

    async def persist(self) -> bool:
        return await self.persister.persist()

    def flush_in_background(self) -> asyncio.Task | None:
        """Best-effort flush for visibility-loss signals."""
        return self.persister.flush_in_background()

    async def close(self, *, persist: bool = True) -> bool:
        """Flush outstanding writes and close the store.

        With ``persist`` (the default) the image is written once more and the
        result is returned. Read-only callers pass ``persist=False``; no
        final write is made and False is returned. The connection is closed
        either way.
        """
        try:
            await self.persister.drain()
            if not persist:
                return False
            return await self.persister.persist()
        finally:
            self.conn.close()
