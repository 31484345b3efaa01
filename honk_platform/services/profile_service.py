"""Device-local display-name profile, stored under its own blob key."""

from __future__ import annotations

from honk_platform.errors import InvalidInputError
from honk_platform.persistence import BlobStore
from honk_platform.runtime.config import USER_KEY


class ProfileStore:
    """Get/set/clear the single display name."""

    def __init__(self, blob_store: BlobStore, *, key: str = USER_KEY):
        self.blob_store = blob_store
        self.key = key

    async def get_display_name(self) -> str | None:
        raw = await self.blob_store.get(self.key)
        if not raw:
            return None
        return raw.decode("utf-8")

    async def set_display_name(self, name: str) -> str:
        """Store a trimmed display name. Returns the stored value."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInputError("Please enter a name")
        await self.blob_store.set(self.key, cleaned.encode("utf-8"))
        return cleaned

    async def clear(self) -> None:
        await self.blob_store.delete(self.key)
