"""Advanced exposure score for persisted records."""

from datetime import date, datetime

from models.records import ExposureRecord, RiskUpdate
from .tables import WeightTables, DEFAULT_TABLES
from .utils import clamp_score, round_half_up


def days_since(scan_date: date | datetime | None, as_of: date) -> float | None:
    if scan_date is None:
        return None
    if isinstance(scan_date, datetime):
        scan_date = scan_date.date()
    return float((as_of - scan_date).days)


class RiskScorer:
    """
    Per-record exposure risk.

    Scoring:
        sensitivity = mean sensitivity weight of data_exposed (0 when empty)
        risk        = min(100, sensitivity * reputation * recency * correlation * 0.8)

    The correlation multiplier comes from an external analysis step and is
    passed through untouched. The scorer never writes; recompute_risk_scores
    returns RiskUpdate values for the caller to persist.
    """

    DAMPING = 0.8

    def __init__(self, tables: WeightTables = DEFAULT_TABLES):
        self.tables = tables

    def sensitivity(self, data_exposed: list[str]) -> float:
        total = sum(self.tables.sensitivity_weight(t) for t in data_exposed)
        return total / max(len(data_exposed), 1)

    def _terms(self, record: ExposureRecord, as_of: date) -> tuple[float, float, float]:
        sensitivity = self.sensitivity(record.data_exposed)
        reputation = self.tables.source_multiplier(record.source_type)
        recency = self.tables.recency_multiplier(days_since(record.scan_date, as_of))
        return sensitivity, reputation, recency

    def compute_risk(
        self,
        record: ExposureRecord,
        correlation_multiplier: float = 1.0,
        as_of: date | None = None,
    ) -> int:
        as_of = as_of or date.today()
        sensitivity, reputation, recency = self._terms(record, as_of)
        risk = sensitivity * reputation * recency * correlation_multiplier * self.DAMPING
        return clamp_score(min(100, risk))

    def recompute_risk_scores(
        self,
        records: list[ExposureRecord],
        correlation_multiplier: float = 1.0,
        as_of: date | None = None,
    ) -> list[RiskUpdate]:
        as_of = as_of or date.today()
        updates = []

        for record in records:
            sensitivity, reputation, recency = self._terms(record, as_of)
            updates.append(RiskUpdate(
                id=record.id,
                original_score=record.risk_score,
                advanced_score=self.compute_risk(record, correlation_multiplier, as_of),
                sensitivity_score=round_half_up(sensitivity),
                reputation_multiplier=reputation,
                recency_multiplier=recency,
                correlation_multiplier=correlation_multiplier,
            ))

        return updates
