"""Platform-owned plate store."""

import sqlite3

from honk_platform.models import LeaderboardEntry


class PlateStore:
    """Row operations on the ``plates`` table.

    None of these methods commit; the caller owns the transaction.
    """

    @staticmethod
    def get(conn: sqlite3.Connection, plate_text: str) -> dict | None:
        """Load a single plate row, or None if the plate was never voted."""
        row = conn.execute(
            "SELECT plate_text, score, updated_at FROM plates WHERE plate_text = ?",
            (plate_text,),
        ).fetchone()
        if row is None:
            return None
        return dict(row)

    @staticmethod
    def ensure_exists(conn: sqlite3.Connection, plate_text: str, now: str) -> bool:
        """Insert a zero-score row for *plate_text* if missing.

        Returns True when a row was created.
        """
        row = conn.execute(
            "SELECT 1 FROM plates WHERE plate_text = ?", (plate_text,)
        ).fetchone()
        if row is not None:
            return False
        conn.execute(
            "INSERT INTO plates (plate_text, score, updated_at) VALUES (?, 0, ?)",
            (plate_text, now),
        )
        return True

    @staticmethod
    def apply_delta(conn: sqlite3.Connection, plate_text: str, delta: int,
                    now: str) -> int:
        """Add *delta* to the running score. Returns the new score."""
        conn.execute(
            "UPDATE plates SET score = score + ?, updated_at = ? WHERE plate_text = ?",
            (delta, now, plate_text),
        )
        row = conn.execute(
            "SELECT score FROM plates WHERE plate_text = ?", (plate_text,)
        ).fetchone()
        return row["score"]

    @staticmethod
    def top_positive(conn: sqlite3.Connection, limit: int) -> list[LeaderboardEntry]:
        """Plates with a positive score, highest first."""
        rows = conn.execute(
            "SELECT plate_text, score FROM plates WHERE score > 0 "
            "ORDER BY score DESC, rowid ASC LIMIT ?",
            (limit,),
        ).fetchall()
        return [LeaderboardEntry(r["plate_text"], r["score"]) for r in rows]

    @staticmethod
    def top_negative(conn: sqlite3.Connection, limit: int) -> list[LeaderboardEntry]:
        """Plates with a negative score, most negative first."""
        rows = conn.execute(
            "SELECT plate_text, score FROM plates WHERE score < 0 "
            "ORDER BY score ASC, rowid ASC LIMIT ?",
            (limit,),
        ).fetchall()
        return [LeaderboardEntry(r["plate_text"], r["score"]) for r in rows]

    @staticmethod
    def count(conn: sqlite3.Connection) -> int:
        row = conn.execute("SELECT COUNT(*) FROM plates").fetchone()
        return row[0]

    @staticmethod
    def list_all(conn: sqlite3.Connection) -> list[dict]:
        """List every plate row in insertion order."""
        rows = conn.execute(
            "SELECT plate_text, score, updated_at FROM plates ORDER BY rowid"
        ).fetchall()
        return [dict(r) for r in rows]


__all__ = ["PlateStore"]
