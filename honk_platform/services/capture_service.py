"""Turn an OCR guess into a pre-fill suggestion for the vote form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from honk_platform.errors import InvalidInputError
from honk_platform.ports import PlateGuesser

from .vote_service import normalize_plate


@dataclass
class CaptureSession:
    """Explicit handle on the active capture pipeline."""

    guesser: PlateGuesser
    frames_seen: int = 0

    def suggest(self, frame: Any) -> str:
        self.frames_seen += 1
        return suggest_plate(self.guesser, frame)


def suggest_plate(guesser: PlateGuesser, frame: Any) -> str:
    """Return a normalized plate suggestion for *frame*, or "".

    The suggestion only pre-fills the form; whatever the user submits still
    goes through ``record_vote`` validation.
    """
    guess = guesser.extract_plate_guess(frame) or ""
    try:
        return normalize_plate(guess)
    except InvalidInputError:
        return ""
