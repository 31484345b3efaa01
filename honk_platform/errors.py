"""Typed failures raised by the local data layer."""


class HonkError(Exception):
    """Base exception for honk data-layer failures."""


class InvalidInputError(HonkError):
    """Raised when caller input is empty or malformed (e.g. a blank plate)."""


class ConstraintViolationError(HonkError):
    """Raised when a write would breach a schema constraint."""


class CorruptImageError(HonkError):
    """Raised when a persisted database image cannot be restored."""


class StorageUnavailableError(HonkError):
    """Raised when the blob store cannot be read or written."""

    def __init__(self, key: str, detail: str):
        super().__init__(f"Blob store unavailable for key {key!r}: {detail}")
        self.key = key
        self.detail = detail


__all__ = [
    "HonkError",
    "InvalidInputError",
    "ConstraintViolationError",
    "CorruptImageError",
    "StorageUnavailableError",
]
