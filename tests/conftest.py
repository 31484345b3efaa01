"""
Shared fixtures for honk tests.
"""

import pytest

from honk_platform.errors import StorageUnavailableError
from honk_platform.persistence import MemoryBlobStore, SnapshotPersister, export_image, open_store
from honk_platform.persistence.database import now_timestamp


class FailingBlobStore(MemoryBlobStore):
    """MemoryBlobStore whose reads and/or writes can be switched off."""

    def __init__(self, initial=None, *, fail_reads=False, fail_writes=True):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    async def get(self, key):
        if self.fail_reads:
            raise StorageUnavailableError(key, "read refused")
        return await super().get(key)

    async def set(self, key, data):
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageUnavailableError(key, "disk full")
        await super().set(key, data)


@pytest.fixture
def db_conn():
    """Create a fresh in-memory store with the honk schema."""
    conn = open_store()
    yield conn
    conn.close()


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def failing_blob_store():
    return FailingBlobStore()


@pytest.fixture
def persister(db_conn, blob_store):
    return SnapshotPersister(db_conn, blob_store)


@pytest.fixture
def table_counts():
    """Return a helper that reads ``(plates, votes)`` row counts."""
    def _counts(conn):
        plates = conn.execute("SELECT COUNT(*) FROM plates").fetchone()[0]
        votes = conn.execute("SELECT COUNT(*) FROM votes").fetchone()[0]
        return plates, votes
    return _counts


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point HONK_DATA_DIR at a temporary directory."""
    path = tmp_path / "honk-data"
    monkeypatch.setenv("HONK_DATA_DIR", str(path))
    return path


@pytest.fixture
def failing_store_factory():
    """Return the FailingBlobStore class for tests that need custom switches."""
    return FailingBlobStore


@pytest.fixture
def damaged_image():
    """An image whose schema page is intact but whose data pages are overwritten."""
    conn = open_store()
    conn.executemany(
        "INSERT INTO votes (id, plate_text, value, created_at) VALUES (?, ?, ?, ?)",
        [(f"vote-{i:05d}", f"PLATE{i % 97}", 1, now_timestamp()) for i in range(3000)],
    )
    conn.commit()
    image = bytearray(export_image(conn))
    conn.close()

    page_size = int.from_bytes(image[16:18], "big")
    if page_size == 1:
        page_size = 65536
    for start in range(3 * page_size, len(image), page_size):
        image[start:start + 64] = b"\xff" * 64
    return bytes(image)
