"""Platform-owned voting service.

Recording a vote touches both tables: the plate row is created on first use,
its running score is moved by the delta, and an immutable vote event is
appended. The three statements commit together or not at all.
"""

import logging
import re
import sqlite3

from honk_platform.errors import ConstraintViolationError, InvalidInputError
from honk_platform.models import VoteRecord
from honk_platform.persistence import PlateStore, VoteStore, now_timestamp
from honk_platform.runtime.config import VOTE_VALUES

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_plate(raw_plate_text: str) -> str:
    """Return the canonical plate identifier for *raw_plate_text*.

    Whitespace is removed (surrounding and inner) and letters are
    upper-cased, so ``" abc 123 "`` and ``"ABC123"`` name the same plate.
    Raises ``InvalidInputError`` when nothing is left.
    """
    if not isinstance(raw_plate_text, str):
        raise InvalidInputError("Plate required")
    plate = _WHITESPACE_RE.sub("", raw_plate_text).upper()
    if not plate:
        raise InvalidInputError("Plate required")
    return plate


def validate_delta(delta) -> int:
    """Return *delta* if it is exactly +1 or -1, else raise."""
    if isinstance(delta, bool) or not isinstance(delta, int) or delta not in VOTE_VALUES:
        raise ConstraintViolationError(f"Vote value must be +1 or -1, got {delta!r}")
    return delta


def record_vote(conn: sqlite3.Connection, raw_plate_text: str, delta: int) -> VoteRecord:
    """Apply one signed vote to a plate and append the vote event.

    Input is validated before any statement runs. The ensure-row, score
    update and vote insert share one transaction; on failure it is rolled
    back and nothing is visible. Persisting the new state is the caller's
    job.
    """
    plate = normalize_plate(raw_plate_text)
    value = validate_delta(delta)
    now = now_timestamp()

    conn.execute("BEGIN")
    try:
        created = PlateStore.ensure_exists(conn, plate, now)
        score = PlateStore.apply_delta(conn, plate, value, now)
        vote_id = VoteStore.append(conn, plate, value, now)
    except sqlite3.IntegrityError as e:
        conn.rollback()
        raise ConstraintViolationError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    conn.commit()

    if created:
        logger.info("First vote for plate %s", plate)
    return VoteRecord(id=vote_id, plate_text=plate, value=value, created_at=now, score=score)


def get_plate(conn: sqlite3.Connection, raw_plate_text: str) -> dict | None:
    """Look up a plate by any spelling that normalizes to it."""
    return PlateStore.get(conn, normalize_plate(raw_plate_text))


def list_votes_for_plate(conn: sqlite3.Connection, raw_plate_text: str) -> list[dict]:
    return VoteStore.list_for_plate(conn, normalize_plate(raw_plate_text))
