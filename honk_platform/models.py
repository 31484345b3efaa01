"""Platform-facing models returned by the data layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import NamedTuple


class LeaderboardEntry(NamedTuple):
    """One leaderboard row; compares equal to ``(plate_text, score)``."""

    plate_text: str
    score: int


@dataclass
class Leaderboard:
    best: list[LeaderboardEntry] = field(default_factory=list)
    worst: list[LeaderboardEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "best": [entry._asdict() for entry in self.best],
            "worst": [entry._asdict() for entry in self.worst],
        }


@dataclass(frozen=True)
class VoteRecord:
    """A committed vote event plus the plate's score after applying it."""

    id: str
    plate_text: str
    value: int
    created_at: str
    score: int


@dataclass(frozen=True)
class VoteReceipt:
    """What a caller gets back after a vote: the record and its durability.

    ``persisted`` is False when the vote is committed in memory but the
    snapshot write to the blob store failed; the next persist retries it.
    """

    vote: VoteRecord
    persisted: bool

    def to_dict(self) -> dict:
        return {**asdict(self.vote), "persisted": self.persisted}


__all__ = ["LeaderboardEntry", "Leaderboard", "VoteRecord", "VoteReceipt"]
