"""
Configuration constants for the honk data layer.
"""

import os
from pathlib import Path

# Blob store keys. The database image and the profile never share a write.
DB_KEY = "honk_sqlite_v1"
USER_KEY = "honk_user_v1"

# File suffix used by the file-backed blob store
BLOB_SUFFIX = ".bin"

# The only vote deltas the votes table accepts
VOTE_VALUES = (1, -1)

_LEADERBOARD_LIMIT_ENV = "HONK_LEADERBOARD_LIMIT"
_DATA_DIR_ENV = "HONK_DATA_DIR"

_DEFAULT_LEADERBOARD_LIMIT = 50


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Rows returned per leaderboard side
LEADERBOARD_LIMIT = _to_int_env(_LEADERBOARD_LIMIT_ENV, _DEFAULT_LEADERBOARD_LIMIT)


def get_data_dir() -> Path:
    """Return the directory holding the blob store files.

    Uses a platform-appropriate location and supports an override via
    ``HONK_DATA_DIR`` for tests and portable installs.
    """
    override = os.environ.get(_DATA_DIR_ENV, "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / "honk"

    return Path.home() / ".local" / "share" / "honk"
