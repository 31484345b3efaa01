"""Platform-owned vote store."""

import sqlite3
import uuid


class VoteStore:
    """Append-only access to the ``votes`` table.

    Votes are never updated or deleted here; only a schema rebuild removes
    them. Methods do not commit.
    """

    @staticmethod
    def append(conn: sqlite3.Connection, plate_text: str, value: int,
               now: str) -> str:
        """Insert a vote event with a fresh id. Returns the vote id."""
        vote_id = str(uuid.uuid4())
        conn.execute(
            "INSERT INTO votes (id, plate_text, value, created_at) VALUES (?, ?, ?, ?)",
            (vote_id, plate_text, value, now),
        )
        return vote_id

    @staticmethod
    def count(conn: sqlite3.Connection, plate_text: str | None = None) -> int:
        """Count votes, optionally for a single plate."""
        if plate_text is None:
            row = conn.execute("SELECT COUNT(*) FROM votes").fetchone()
        else:
            row = conn.execute(
                "SELECT COUNT(*) FROM votes WHERE plate_text = ?", (plate_text,)
            ).fetchone()
        return row[0]

    @staticmethod
    def sum_for_plate(conn: sqlite3.Connection, plate_text: str) -> int:
        row = conn.execute(
            "SELECT COALESCE(SUM(value), 0) FROM votes WHERE plate_text = ?",
            (plate_text,),
        ).fetchone()
        return row[0]

    @staticmethod
    def list_for_plate(conn: sqlite3.Connection, plate_text: str) -> list[dict]:
        """List the votes recorded against one plate, oldest first."""
        rows = conn.execute(
            "SELECT id, plate_text, value, created_at FROM votes "
            "WHERE plate_text = ? ORDER BY rowid",
            (plate_text,),
        ).fetchall()
        return [dict(r) for r in rows]

    @staticmethod
    def list_all(conn: sqlite3.Connection) -> list[dict]:
        rows = conn.execute(
            "SELECT id, plate_text, value, created_at FROM votes ORDER BY rowid"
        ).fetchall()
        return [dict(r) for r in rows]


__all__ = ["VoteStore"]
