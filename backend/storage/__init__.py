from .record_store import RecordStore, InMemoryRecordStore

record_store = InMemoryRecordStore()

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "record_store",
]
