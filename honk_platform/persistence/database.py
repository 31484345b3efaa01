"""Platform-owned SQLite database primitives.

The store lives entirely in memory. Durability comes from serializing the
whole database to a byte image (``export_image``) and restoring it at boot
(``open_store``); the blob store that holds the image is a separate concern.
"""

import logging
import sqlite3
from datetime import datetime, timezone

from honk_platform.errors import CorruptImageError

logger = logging.getLogger(__name__)

# Columns a restored image must carry, per table
_REQUIRED_COLUMNS = {
    "plates": ("plate_text", "score", "updated_at"),
    "votes": ("id", "plate_text", "value", "created_at"),
}


def now_timestamp() -> str:
    """Return the current UTC time in SQLite ``datetime()`` text form."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def open_store(image: bytes | None = None) -> sqlite3.Connection:
    """Open the in-memory store, fresh or restored from a database image.

    With no image, the schema is created. With an image, the exact table and
    row state it encodes is restored; no migration is attempted, and an image
    that SQLite cannot read or that lacks the current schema raises
    ``CorruptImageError``. The caller is responsible for closing the
    connection.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row

    if image is None:
        init_db(conn)
        return conn

    try:
        conn.deserialize(bytes(image))
        _validate_schema(conn)
    except sqlite3.DatabaseError as e:
        conn.close()
        raise CorruptImageError(f"Database image could not be read: {e}") from e
    except CorruptImageError:
        conn.close()
        raise
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables and the vote index if they don't exist."""
    conn.executescript(_SCHEMA_SQL)


def rebuild_schema(conn: sqlite3.Connection) -> None:
    """Drop both tables and recreate the first-boot schema.

    The drop and the create run in a single transaction.
    """
    logger.info("Rebuilding schema: dropping plates and votes")
    try:
        conn.executescript("BEGIN;\n" + _DROP_SQL + _SCHEMA_SQL + "COMMIT;\n")
    except sqlite3.Error:
        if conn.in_transaction:
            conn.rollback()
        raise


def export_image(conn: sqlite3.Connection) -> bytes:
    """Serialize the full store to its database image."""
    return conn.serialize()


def _table_has_column(conn: sqlite3.Connection, table: str, column: str) -> bool:
    """Return True if *table* contains *column*."""
    cols = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return any(c[1] == column for c in cols)


def _validate_schema(conn: sqlite3.Connection) -> None:
    """Raise ``CorruptImageError`` unless the image is readable and current."""
    for table, columns in _REQUIRED_COLUMNS.items():
        missing = [c for c in columns if not _table_has_column(conn, table, c)]
        if missing:
            raise CorruptImageError(
                f"Database image is missing {table}.{', '.join(missing)}"
            )

    # The schema page can be intact while data pages are damaged.
    problems = [r[0] for r in conn.execute("PRAGMA quick_check").fetchall()]
    if problems != ["ok"]:
        raise CorruptImageError(
            f"Database image failed integrity check: {'; '.join(problems[:3])}"
        )


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS plates (
    plate_text TEXT PRIMARY KEY,
    score INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS votes (
    id TEXT PRIMARY KEY,
    plate_text TEXT NOT NULL,
    value INTEGER NOT NULL CHECK (value IN (-1, 1)),
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_votes_plate ON votes(plate_text);
"""

_DROP_SQL = """
DROP TABLE IF EXISTS votes;
DROP TABLE IF EXISTS plates;
"""


__all__ = ["now_timestamp", "open_store", "init_db", "rebuild_schema", "export_image"]
