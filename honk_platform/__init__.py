"""Platform layer for the honk local plate-voting ledger."""

__version__ = "1.0.0"

from .errors import (
    ConstraintViolationError,
    CorruptImageError,
    HonkError,
    InvalidInputError,
    StorageUnavailableError,
)
from .facade import HonkFacade
from .models import Leaderboard, LeaderboardEntry, VoteReceipt, VoteRecord
from .persistence import FileBlobStore, MemoryBlobStore

__all__ = [
    "__version__",
    "HonkFacade",
    "FileBlobStore",
    "MemoryBlobStore",
    "Leaderboard",
    "LeaderboardEntry",
    "VoteRecord",
    "VoteReceipt",
    "HonkError",
    "InvalidInputError",
    "ConstraintViolationError",
    "CorruptImageError",
    "StorageUnavailableError",
]
