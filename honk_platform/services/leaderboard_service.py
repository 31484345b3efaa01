"""Platform-owned leaderboard queries (read-only)."""

import sqlite3

from honk_platform.errors import InvalidInputError
from honk_platform.models import Leaderboard, LeaderboardEntry
from honk_platform.persistence import PlateStore
from honk_platform.runtime.config import LEADERBOARD_LIMIT


def _check_limit(limit) -> int:
    # SQLite reads a negative LIMIT as "no limit", so it is rejected here.
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise InvalidInputError(f"Leaderboard limit must be a non-negative integer, got {limit!r}")
    return limit


def top_positive(conn: sqlite3.Connection, limit: int = LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
    """Most upvoted plates: ``score > 0``, highest first, at most *limit*."""
    return PlateStore.top_positive(conn, _check_limit(limit))


def top_negative(conn: sqlite3.Connection, limit: int = LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
    """Most downvoted plates: ``score < 0``, lowest first, at most *limit*."""
    return PlateStore.top_negative(conn, _check_limit(limit))


def load_leaderboard(conn: sqlite3.Connection, limit: int = LEADERBOARD_LIMIT) -> Leaderboard:
    """Both leaderboard sides in one result."""
    return Leaderboard(
        best=top_positive(conn, limit),
        worst=top_negative(conn, limit),
    )
