"""
FastAPI application setup for the honk Web API.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from honk_platform.persistence import FileBlobStore
from honk_platform.runtime.config import get_data_dir

from . import __version__ as WEB_VERSION
from .routes import ledger_mgr, router

# Load .env file (if present) so HONK_DATA_DIR is available via os.environ
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Boot the ledger at startup; flush and close it at shutdown."""
    data_dir = get_data_dir()
    logger.info("Booting ledger from %s", data_dir)
    await ledger_mgr.start(FileBlobStore(data_dir))
    try:
        yield
    finally:
        await ledger_mgr.shutdown()


# App
app = FastAPI(
    title="honk",
    description="Local license-plate voting and leaderboards",
    version=WEB_VERSION,
    lifespan=lifespan,
)

# Include API routes
app.include_router(router)
