"""Record store for exposure records and alerts."""

import logging
from abc import ABC, abstractmethod
from threading import Lock

from engine.errors import ContractViolation, RecordNotFound
from models.records import ExposureRecord, NotificationAlert

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """
    Persistence interface used by the pipelines.

    Implementations must make upsert atomic with respect to other writes for
    the same (profile_id, source_name) pair.
    """

    @abstractmethod
    def create(self, record: ExposureRecord) -> ExposureRecord:
        pass

    @abstractmethod
    def update(self, record_id: str, **changes) -> ExposureRecord:
        pass

    @abstractmethod
    def get(self, record_id: str) -> ExposureRecord | None:
        pass

    @abstractmethod
    def find(self, profile_id: str, source_name: str) -> ExposureRecord | None:
        pass

    @abstractmethod
    def upsert(self, record: ExposureRecord) -> tuple[ExposureRecord, bool]:
        """Create, or update the record already stored for the pair. Returns (record, created)."""
        pass

    @abstractmethod
    def list_by_profile(self, profile_id: str) -> list[ExposureRecord]:
        pass

    @abstractmethod
    def add_alert(self, alert: NotificationAlert) -> NotificationAlert:
        pass

    @abstractmethod
    def list_alerts(self, profile_id: str) -> list[NotificationAlert]:
        pass

    @abstractmethod
    def audit_orphans(self) -> list[str]:
        """IDs of stored records with no profile_id."""
        pass


def _dedupe_key(profile_id: str, source_name: str) -> tuple[str, str]:
    return profile_id, source_name.strip().lower()


def _require_profile(record: ExposureRecord):
    if not record.profile_id or not str(record.profile_id).strip():
        raise ContractViolation(f"record {record.id} has no profile_id")
    if not record.metadata.matched_fields and not record.data_exposed:
        raise ContractViolation(f"record {record.id} has no matched fields")


class InMemoryRecordStore(RecordStore):
    def __init__(self):
        self._records: dict[str, ExposureRecord] = {}
        self._index: dict[tuple[str, str], str] = {}
        self._alerts: list[NotificationAlert] = []
        self._lock = Lock()

    def _insert(self, record: ExposureRecord) -> ExposureRecord:
        stored = record.model_copy(deep=True)
        self._records[stored.id] = stored
        self._index[_dedupe_key(stored.profile_id, stored.source_name)] = stored.id
        return stored.model_copy(deep=True)

    def create(self, record: ExposureRecord) -> ExposureRecord:
        _require_profile(record)
        with self._lock:
            key = _dedupe_key(record.profile_id, record.source_name)
            if key in self._index:
                raise ContractViolation(
                    f"record for source '{record.source_name}' already exists on this profile"
                )
            return self._insert(record)

    def update(self, record_id: str, **changes) -> ExposureRecord:
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                raise RecordNotFound(record_id)
            changes.pop("id", None)
            changes.pop("profile_id", None)
            updated = ExposureRecord.model_validate({**current.model_dump(), **changes})
            self._records[record_id] = updated
            return updated.model_copy(deep=True)

    def get(self, record_id: str) -> ExposureRecord | None:
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record else None

    def find(self, profile_id: str, source_name: str) -> ExposureRecord | None:
        with self._lock:
            record_id = self._index.get(_dedupe_key(profile_id, source_name))
            if record_id is None:
                return None
            return self._records[record_id].model_copy(deep=True)

    def upsert(self, record: ExposureRecord) -> tuple[ExposureRecord, bool]:
        _require_profile(record)
        with self._lock:
            existing_id = self._index.get(_dedupe_key(record.profile_id, record.source_name))
            if existing_id is None:
                return self._insert(record), True

            current = self._records[existing_id]
            data = record.model_dump(exclude={"id", "profile_id", "status"})
            updated = ExposureRecord.model_validate({**current.model_dump(), **data})
            self._records[existing_id] = updated
            return updated.model_copy(deep=True), False

    def list_by_profile(self, profile_id: str) -> list[ExposureRecord]:
        with self._lock:
            return [
                r.model_copy(deep=True)
                for r in self._records.values()
                if r.profile_id == profile_id
            ]

    def add_alert(self, alert: NotificationAlert) -> NotificationAlert:
        with self._lock:
            self._alerts.append(alert)
        logger.info("Alert stored: %s (%s)", alert.title, alert.severity)
        return alert

    def list_alerts(self, profile_id: str) -> list[NotificationAlert]:
        with self._lock:
            return [a for a in self._alerts if a.profile_id == profile_id]

    def audit_orphans(self) -> list[str]:
        with self._lock:
            return [r.id for r in self._records.values() if not r.profile_id]

    def clear(self):
        with self._lock:
            self._records.clear()
            self._index.clear()
            self._alerts.clear()
