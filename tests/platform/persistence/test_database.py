"""
Tests for the in-memory SQLite store: schema, image export and restore.
"""

import sqlite3

import pytest

from honk_platform.errors import CorruptImageError
from honk_platform.persistence import (
    PlateStore,
    VoteStore,
    export_image,
    open_store,
    rebuild_schema,
)
from honk_platform.persistence.database import now_timestamp
from honk_platform.services import record_vote


def _tables(conn):
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
    ).fetchall()
    return [r[0] for r in rows]


class TestOpenStore:
    """Tests for first-boot initialization."""

    def test_fresh_store_has_both_tables(self, db_conn):
        assert _tables(db_conn) == ["plates", "votes"]

    def test_fresh_store_has_vote_index(self, db_conn):
        row = db_conn.execute(
            "SELECT tbl_name FROM sqlite_master WHERE type = 'index' AND name = 'idx_votes_plate'"
        ).fetchone()
        assert row is not None
        assert row[0] == "votes"

    def test_score_defaults_to_zero(self, db_conn):
        db_conn.execute("INSERT INTO plates (plate_text) VALUES (?)", ("ABC123",))
        row = db_conn.execute("SELECT score, updated_at FROM plates").fetchone()
        assert row["score"] == 0
        assert row["updated_at"]

    def test_vote_value_check_constraint(self, db_conn):
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute(
                "INSERT INTO votes (id, plate_text, value) VALUES (?, ?, ?)",
                ("v1", "ABC123", 2),
            )

    def test_plate_text_is_unique(self, db_conn):
        db_conn.execute("INSERT INTO plates (plate_text) VALUES (?)", ("ABC123",))
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute("INSERT INTO plates (plate_text) VALUES (?)", ("ABC123",))


class TestImageRoundTrip:
    """Tests for export_image / open_store(image)."""

    def test_round_trip_preserves_rows(self, db_conn):
        record_vote(db_conn, "abc123", 1)
        record_vote(db_conn, "abc123", 1)
        record_vote(db_conn, "xyz999", -1)

        restored = open_store(export_image(db_conn))
        try:
            assert PlateStore.list_all(restored) == PlateStore.list_all(db_conn)
            assert VoteStore.list_all(restored) == VoteStore.list_all(db_conn)
        finally:
            restored.close()

    def test_round_trip_of_empty_store(self, db_conn):
        restored = open_store(export_image(db_conn))
        try:
            assert _tables(restored) == ["plates", "votes"]
            assert PlateStore.count(restored) == 0
        finally:
            restored.close()

    def test_restored_store_is_writable(self, db_conn):
        record_vote(db_conn, "ABC123", 1)
        restored = open_store(export_image(db_conn))
        try:
            vote = record_vote(restored, "ABC123", 1)
            assert vote.score == 2
        finally:
            restored.close()

    def test_restore_accepts_bytearray(self, db_conn):
        record_vote(db_conn, "ABC123", -1)
        restored = open_store(bytearray(export_image(db_conn)))
        try:
            assert PlateStore.get(restored, "ABC123")["score"] == -1
        finally:
            restored.close()


class TestCorruptImage:
    """Tests for images that cannot be restored."""

    def test_garbage_bytes(self):
        with pytest.raises(CorruptImageError):
            open_store(b"this is definitely not a sqlite database image")

    def test_image_without_schema(self):
        other = sqlite3.connect(":memory:")
        other.execute("CREATE TABLE unrelated (x INTEGER)")
        other.commit()
        image = other.serialize()
        other.close()

        with pytest.raises(CorruptImageError, match="plates"):
            open_store(image)

    def test_image_with_old_columns(self):
        other = sqlite3.connect(":memory:")
        other.executescript(
            "CREATE TABLE plates (plate_text TEXT PRIMARY KEY, score INTEGER);"
            "CREATE TABLE votes (id TEXT PRIMARY KEY, plate_text TEXT, value INTEGER, created_at TEXT);"
        )
        image = other.serialize()
        other.close()

        with pytest.raises(CorruptImageError, match="updated_at"):
            open_store(image)

    def test_damaged_data_pages(self, damaged_image):
        with pytest.raises(CorruptImageError):
            open_store(damaged_image)


class TestRebuildSchema:

    def test_rebuild_drops_all_rows(self, db_conn):
        record_vote(db_conn, "ABC123", 1)
        rebuild_schema(db_conn)
        assert PlateStore.count(db_conn) == 0
        assert VoteStore.count(db_conn) == 0
        assert _tables(db_conn) == ["plates", "votes"]

    def test_rebuild_keeps_constraints(self, db_conn):
        rebuild_schema(db_conn)
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute(
                "INSERT INTO votes (id, plate_text, value) VALUES (?, ?, ?)",
                ("v1", "ABC123", 0),
            )


def test_now_timestamp_matches_sqlite_datetime_shape():
    ts = now_timestamp()
    # e.g. 2026-10-19 08:15:02.123
    assert len(ts) == 23
    assert ts[10] == " "
    assert ts[19] == "."
