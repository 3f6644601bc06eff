"""Per-user persistence of task and notification collections."""

from .adapter import PersistenceAdapter, RecordKind, storage_key

__all__ = ["PersistenceAdapter", "RecordKind", "storage_key"]
