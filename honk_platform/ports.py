"""Ports for collaborators the data layer consumes but does not own."""

from __future__ import annotations

from typing import Any, Protocol


class PlateGuesser(Protocol):
    """Port for the camera/OCR pipeline.

    Returns a best-effort plate reading for one captured frame, or an empty
    string when nothing legible was found.
    """

    def extract_plate_guess(self, frame: Any) -> str:
        ...
