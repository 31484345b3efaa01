"""
Server-side ledger manager for the Web API.

Bridges the web layer to the honk platform facade. The facade is booted
once at startup and closed at shutdown; every vote and reset is persisted
before the request returns.
"""

import logging
from typing import Optional

from honk_platform import HonkFacade
from honk_platform.persistence import BlobStore

logger = logging.getLogger(__name__)


class LedgerNotReadyError(Exception):
    """Raised when a request arrives before the ledger is booted."""


class WebLedgerManager:
    """Holds the single facade shared by all requests (single-user local tool)."""

    def __init__(self):
        self.facade: Optional[HonkFacade] = None

    @property
    def is_ready(self) -> bool:
        return self.facade is not None

    def require(self) -> HonkFacade:
        if self.facade is None:
            raise LedgerNotReadyError("Ledger is not ready")
        return self.facade

    async def start(self, blob_store: BlobStore) -> HonkFacade:
        self.facade = await HonkFacade.boot(blob_store)
        logger.info("Ledger ready (restored=%s)", self.facade.restored)
        return self.facade

    async def shutdown(self) -> None:
        """Drain background flushes, persist, and close the store."""
        if self.facade is None:
            return
        facade, self.facade = self.facade, None
        persisted = await facade.close()
        if not persisted:
            logger.warning("Final snapshot on shutdown could not be saved")
