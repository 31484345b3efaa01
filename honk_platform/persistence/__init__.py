"""Platform-owned persistence layer (database, stores and snapshots)."""

from .blob_store import BlobStore, FileBlobStore, MemoryBlobStore
from .database import export_image, init_db, now_timestamp, open_store, rebuild_schema
from .plate_store import PlateStore
from .snapshot import SnapshotPersister
from .vote_store import VoteStore
