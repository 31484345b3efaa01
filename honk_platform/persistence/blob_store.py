"""Durable key-value byte storage for the database image and the profile.

Two implementations share the ``BlobStore`` protocol:

    FileBlobStore: one file per key under a data directory
    MemoryBlobStore: process-local dict, for tests and ephemeral runs

There are no transactions across keys.
"""

from __future__ import annotations

import asyncio
import os
import re
import tempfile
from pathlib import Path
from typing import Protocol

from honk_platform.errors import StorageUnavailableError
from honk_platform.runtime.config import BLOB_SUFFIX


_KEY_RE = re.compile(r"^[A-Za-z0-9._-]+$")


class BlobStore(Protocol):
    """Port for async byte storage keyed by short string keys."""

    async def get(self, key: str) -> bytes | None:
        ...

    async def set(self, key: str, data: bytes) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


class FileBlobStore:
    """Blob store backed by files in a single directory.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace``, so a reader never sees a half-written blob.
    File I/O runs in a worker thread to keep the event loop free.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        """Return the file that holds *key*."""
        if not _KEY_RE.match(key or ""):
            raise ValueError(f"Invalid blob key: {key!r}")
        return self.root / f"{key}{BLOB_SUFFIX}"

    async def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            raise StorageUnavailableError(key, str(e)) from e

    async def set(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write, path, bytes(data))
        except OSError as e:
            raise StorageUnavailableError(key, str(e)) from e

    async def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            raise StorageUnavailableError(key, str(e)) from e

    @staticmethod
    def _read(path: Path) -> bytes | None:
        if not path.exists():
            return None
        return path.read_bytes()

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


class MemoryBlobStore:
    """Blob store that keeps values in a dict for the life of the process."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._blobs: dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> bytes | None:
        return self._blobs.get(key)

    async def set(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    async def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._blobs)


__all__ = ["BlobStore", "FileBlobStore", "MemoryBlobStore"]
