"""
Tests for the voting service: normalization and the vote transaction.
"""

import sqlite3

import pytest

from honk_platform.errors import ConstraintViolationError, InvalidInputError
from honk_platform.persistence import PlateStore, VoteStore
from honk_platform.services import (
    get_plate,
    list_votes_for_plate,
    normalize_plate,
    record_vote,
    validate_delta,
)


class TestNormalizePlate:

    @pytest.mark.parametrize("raw", [" abc123 ", "ABC123", "abc 123", "aBc\t12 3\n"])
    def test_spellings_collapse_to_one_identity(self, raw):
        assert normalize_plate(raw) == "ABC123"

    @pytest.mark.parametrize("raw", ["abc 123", "  Xyz-999 ", "ÄBC 1"])
    def test_idempotent(self, raw):
        once = normalize_plate(raw)
        assert normalize_plate(once) == once

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_blank_rejected(self, raw):
        with pytest.raises(InvalidInputError):
            normalize_plate(raw)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_plate(None)


class TestValidateDelta:

    @pytest.mark.parametrize("delta", [1, -1])
    def test_accepts_unit_votes(self, delta):
        assert validate_delta(delta) == delta

    @pytest.mark.parametrize("delta", [0, 2, -2, True, 1.0, "1", None])
    def test_rejects_everything_else(self, delta):
        with pytest.raises(ConstraintViolationError):
            validate_delta(delta)


class TestRecordVote:

    def test_first_vote_creates_plate_and_event(self, db_conn):
        vote = record_vote(db_conn, " abc123 ", 1)
        assert vote.plate_text == "ABC123"
        assert vote.value == 1
        assert vote.score == 1
        assert vote.id
        assert PlateStore.get(db_conn, "ABC123")["score"] == 1
        assert VoteStore.count(db_conn, "ABC123") == 1

    def test_score_is_sum_of_deltas(self, db_conn):
        deltas = [1, 1, -1, 1, -1, -1, -1]
        for d in deltas:
            record_vote(db_conn, "ABC123", d)
        assert PlateStore.get(db_conn, "ABC123")["score"] == sum(deltas)
        assert VoteStore.sum_for_plate(db_conn, "ABC123") == sum(deltas)

    def test_vote_updates_timestamp(self, db_conn):
        vote = record_vote(db_conn, "ABC123", 1)
        row = PlateStore.get(db_conn, "ABC123")
        assert row["updated_at"] == vote.created_at

    def test_blank_plate_touches_nothing(self, db_conn, table_counts):
        record_vote(db_conn, "ABC123", 1)
        before = table_counts(db_conn)
        with pytest.raises(InvalidInputError):
            record_vote(db_conn, "   ", 1)
        assert table_counts(db_conn) == before

    @pytest.mark.parametrize("delta", [0, 2, -5, True])
    def test_bad_delta_touches_nothing(self, db_conn, table_counts, delta):
        before = table_counts(db_conn)
        with pytest.raises(ConstraintViolationError):
            record_vote(db_conn, "ABC123", delta)
        assert table_counts(db_conn) == before

    def test_failure_mid_transaction_rolls_back(self, db_conn, table_counts, monkeypatch):
        record_vote(db_conn, "ABC123", 1)
        before = table_counts(db_conn)

        def _boom(conn, plate_text, value, now):
            raise sqlite3.IntegrityError("UNIQUE constraint failed: votes.id")

        monkeypatch.setattr(VoteStore, "append", staticmethod(_boom))

        with pytest.raises(ConstraintViolationError):
            record_vote(db_conn, "NEW999", -1)

        # Neither the new plate row nor the score update survived.
        assert table_counts(db_conn) == before
        assert PlateStore.get(db_conn, "NEW999") is None

    def test_unexpected_error_rolls_back_and_propagates(self, db_conn, monkeypatch):
        def _boom(conn, plate_text, delta, now):
            raise RuntimeError("engine fault")

        monkeypatch.setattr(PlateStore, "apply_delta", staticmethod(_boom))

        with pytest.raises(RuntimeError):
            record_vote(db_conn, "ABC123", 1)
        assert PlateStore.get(db_conn, "ABC123") is None

        monkeypatch.undo()
        assert record_vote(db_conn, "ABC123", 1).score == 1

    def test_net_negative_scenario(self, db_conn):
        record_vote(db_conn, "ABC123", 1)
        record_vote(db_conn, "ABC123", -1)
        record_vote(db_conn, "ABC123", -1)
        assert get_plate(db_conn, "abc123")["score"] == -1
        assert len(list_votes_for_plate(db_conn, "ABC123")) == 3

    def test_vote_ids_are_unique(self, db_conn):
        ids = {record_vote(db_conn, "ABC123", 1).id for _ in range(10)}
        assert len(ids) == 10
