"""Pipelines that run the engine against collaborators and the record store."""

import logging
import time
from collections import Counter
from datetime import date, datetime

from engine import (
    Aggregator,
    FindingValidator,
    MatchScorer,
    ProfileAssessor,
    WeightTables,
    DEFAULT_TABLES,
    record_to_finding,
)
from engine.errors import ContractViolation, EngineError
from models.assessment import AggregationResult
from models.findings import CorrelationResult, RawFinding, ValidatedMatch
from models.records import ExposureMetadata, ExposureRecord, ExposureStatus, SocialFinding
from models.requests import PersonalIdentifiers
from models.responses import IdentityScanResponse, PersistenceSummary, RiskRecomputeResponse
from providers import AlertSink, CorrelationProvider, FindingSource, build_alert, should_alert
from storage import RecordStore

logger = logging.getLogger(__name__)

SEVERITY_BASE_SCORES = {"critical": 90, "high": 75, "medium": 50, "low": 30}


class AuditLog:
    """Timestamped audit entries returned to the caller and mirrored to logging."""

    LEVELS = {
        "INFO": logging.INFO,
        "SUCCESS": logging.INFO,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
    }

    def __init__(self, name: str):
        self.name = name
        self.entries: list[str] = []

    def __call__(self, message: str, level: str = "INFO"):
        timestamp = datetime.utcnow().strftime("%H:%M:%S")
        self.entries.append(f"[{timestamp}] [{level}] {message}")
        logger.log(self.LEVELS.get(level, logging.INFO), "[%s] %s", self.name, message)


def _exposure_summary(records: list[ExposureRecord]) -> tuple[list[str], list[dict]]:
    """Data types and per-source exposure shapes, without any personal values."""
    data_types = sorted({t for r in records for t in r.data_exposed})
    exposures = [{"source_type": r.source_type, "data_exposed": list(r.data_exposed)} for r in records]
    return data_types, exposures


class IdentityScanPipeline:
    """
    Validate, score and persist candidate findings for one profile.

    Flow:
    1. Obtain findings (given, or from the search provider)
    2. Validate and score each finding
    3. Categorize and compute the profile score
    4. Upsert one record per (profile_id, source_name)
    5. Notify the alert sink on critical findings or impersonation
    """

    def __init__(
        self,
        store: RecordStore,
        tables: WeightTables = DEFAULT_TABLES,
        min_confidence: float = 50,
        strict_min_confidence: float = 70,
        search: FindingSource | None = None,
        correlation: CorrelationProvider | None = None,
        alerts: AlertSink | None = None,
    ):
        self.store = store
        self.validator = FindingValidator(tables, min_confidence)
        self.strict_validator = FindingValidator(tables, strict_min_confidence)
        self.scorer = MatchScorer(tables)
        self.aggregator = Aggregator()
        self.search = search
        self.correlation = correlation
        self.alerts = alerts

    def evaluate(
        self,
        findings: list[RawFinding],
        strict: bool = False,
    ) -> tuple[list[ValidatedMatch], Counter]:
        """Validate and score findings. Returns (matches, rejection counts)."""
        validator = self.strict_validator if strict else self.validator
        matches = []
        rejected: Counter = Counter()

        for raw in findings:
            reason = validator.check(raw)
            if reason is not None:
                rejected[reason.value] += 1
                continue
            matches.append(self.scorer.apply(ValidatedMatch(**raw.model_dump())))

        return matches, rejected

    def _to_record(self, profile_id: str, match: ValidatedMatch, scan_date: date) -> ExposureRecord:
        return ExposureRecord(
            profile_id=profile_id,
            source_name=match.source_name,
            source_url=match.source_url,
            source_type=match.source_type,
            risk_score=SEVERITY_BASE_SCORES.get(match.severity, 30),
            data_exposed=match.data_exposed or match.matched_fields,
            scan_date=scan_date,
            status=ExposureStatus.NEW,
            metadata=ExposureMetadata(
                matched_fields=match.matched_fields,
                matched_values=match.matched_values,
                confidence=match.confidence,
                is_impersonation=match.is_impersonation,
                explanation=match.explanation,
                scan_type="identity_scan",
            ),
        )

    def _persist(
        self,
        profile_id: str,
        matches: list[ValidatedMatch],
        scan_date: date,
        log: AuditLog,
    ) -> PersistenceSummary:
        summary = PersistenceSummary()
        for match in matches:
            record = self._to_record(profile_id, match, scan_date)
            try:
                _, created = self.store.upsert(record)
            except ContractViolation as e:
                log(f"  REFUSED: {match.source_name} ({e})", "ERROR")
                summary.refused += 1
                continue
            if created:
                summary.created += 1
            else:
                summary.updated += 1
        return summary

    async def run(
        self,
        profile_id: str,
        findings: list[RawFinding] | None = None,
        identifiers: PersonalIdentifiers | None = None,
        strict: bool = False,
        as_of: date | None = None,
    ) -> IdentityScanResponse:
        if not profile_id or not profile_id.strip():
            raise ContractViolation("profile_id is required")

        log = AuditLog("IdentityScan")
        start = time.time()
        as_of = as_of or date.today()

        log("SCAN INITIATED")
        log(f"MODE: {'STRICT' if strict else 'STANDARD'}")

        if findings is None:
            if self.search is None or identifiers is None:
                raise EngineError("no findings supplied and no search provider available")
            log(f"QUERYING: {self.search.name.upper()}")
            findings = await self.search.search(identifiers)

        log(f"CANDIDATES: {len(findings)}")

        matches, rejected = self.evaluate(findings, strict)
        for match in matches:
            log(f"  MATCH: {match.source_name} ({match.source_type}, score {match.match_score})", "SUCCESS")
        for reason, count in sorted(rejected.items()):
            log(f"  REJECTED: {count} ({reason})")

        combinations = []
        if self.correlation is not None and matches:
            data_types = sorted({t for m in matches for t in (m.data_exposed or m.matched_fields)})
            exposures = [
                {"source_type": m.source_type, "data_exposed": m.data_exposed or m.matched_fields}
                for m in matches
            ]
            result = await self.correlation.analyze(profile_id, data_types, exposures)
            if result.degraded:
                log("CORRELATION UNAVAILABLE, CONTINUING WITHOUT COMBINATIONS", "WARN")
            combinations = result.high_risk_combinations

        aggregation = self.aggregator.aggregate(matches, combinations)
        persisted = self._persist(profile_id, matches, as_of, log)
        log(f"PERSISTED: {persisted.created} created, {persisted.updated} updated, {persisted.refused} refused")

        alert_sent = False
        if self.alerts is not None and should_alert(aggregation.stats):
            alert = build_alert(profile_id, aggregation.stats)
            alert_sent, error = await self.alerts.notify(alert)
            if alert_sent:
                log(f"ALERT SENT: {alert.title}", "WARN")
            else:
                log(f"ALERT FAILED: {error}", "ERROR")

        log(f"RISK SCORE: {aggregation.risk_score}/100")
        log(f"SCAN COMPLETE ({time.time() - start:.1f}s)")

        return IdentityScanResponse(
            profile_id=profile_id,
            rejected=sum(rejected.values()),
            rejection_reasons=dict(rejected),
            persisted=persisted,
            alert_sent=alert_sent,
            audit_log=log.entries,
            **aggregation.model_dump(),
        )

    def correlate_stored(self, profile_id: str) -> AggregationResult:
        """Re-run matching rules and scoring over the profile's stored records."""
        matches = []
        for record in self.store.list_by_profile(profile_id):
            raw = record_to_finding(record)
            if self.validator.check_identity(raw) is not None:
                continue
            matches.append(self.scorer.apply(ValidatedMatch(**raw.model_dump())))
        return self.aggregator.aggregate(matches)


class RiskRecomputePipeline:
    """
    Recompute advanced risk scores for a profile's stored records.

    Flow:
    1. Load records
    2. Obtain the correlation multiplier (override, provider, or neutral)
    3. Assess the profile and persist changed scores
    """

    def __init__(
        self,
        store: RecordStore,
        tables: WeightTables = DEFAULT_TABLES,
        correlation: CorrelationProvider | None = None,
    ):
        self.store = store
        self.assessor = ProfileAssessor(tables)
        self.correlation = correlation

    async def _correlate(
        self,
        profile_id: str,
        records: list[ExposureRecord],
        override: float | None,
        log: AuditLog,
    ) -> CorrelationResult:
        if override is not None:
            log(f"CORRELATION MULTIPLIER: {override:.2f} (supplied)")
            return CorrelationResult(correlation_multiplier=override)
        if self.correlation is None or not records:
            return CorrelationResult()

        log(f"QUERYING: {self.correlation.name.upper()}")
        data_types, exposures = _exposure_summary(records)
        result = await self.correlation.analyze(profile_id, data_types, exposures)
        if result.degraded:
            log("CORRELATION UNAVAILABLE, USING 1.0", "WARN")
        else:
            log(f"CORRELATION MULTIPLIER: {result.correlation_multiplier:.2f}")
        return result

    async def run(
        self,
        profile_id: str,
        social_findings: list[SocialFinding] | None = None,
        correlation_multiplier: float | None = None,
        as_of: date | None = None,
    ) -> RiskRecomputeResponse:
        if not profile_id or not profile_id.strip():
            raise ContractViolation("profile_id is required")

        log = AuditLog("RiskRecompute")
        records = self.store.list_by_profile(profile_id)
        log(f"RECORDS: {len(records)}")

        correlation = await self._correlate(profile_id, records, correlation_multiplier, log)
        assessment = self.assessor.assess(profile_id, records, social_findings, correlation, as_of)

        updated = 0
        for update in assessment.enhanced_results:
            if update.advanced_score == update.original_score:
                continue
            self.store.update(update.id, risk_score=update.advanced_score)
            updated += 1

        log(f"UPDATED: {updated} record(s)")
        log(f"OVERALL RISK: {assessment.overall_risk_score}/100 ({assessment.insight_severity.upper()})")

        return RiskRecomputeResponse(
            updated=updated,
            audit_log=log.entries,
            **assessment.model_dump(),
        )
