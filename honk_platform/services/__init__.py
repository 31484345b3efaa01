"""Platform-owned workflow services.

These are the operations clients call; each takes the store handle (and,
where it writes, the persister) explicitly.
"""

from .capture_service import CaptureSession, suggest_plate
from .leaderboard_service import load_leaderboard, top_negative, top_positive
from .profile_service import ProfileStore
from .reset_service import reset_database
from .vote_service import (
    get_plate,
    list_votes_for_plate,
    normalize_plate,
    record_vote,
    validate_delta,
)
