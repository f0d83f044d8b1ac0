"""Advanced profile assessment over persisted exposure records."""

from datetime import date

from models.findings import Category, CorrelationResult, RawFinding
from models.records import ExposureRecord, SocialFinding
from models.assessment import ProfileAssessment, ProfileRiskSnapshot
from .aggregator import categorize
from .risk_scorer import RiskScorer
from .tables import WeightTables, DEFAULT_TABLES
from .utils import clamp_score

SOCIAL_SEVERITY_SCORES = {"critical": 90, "high": 70, "medium": 50, "low": 30}
OPEN_SOCIAL_STATUSES = {"new", "investigating"}
IMPERSONATION_TYPES = {"impersonation", "identity_theft"}

IMPERSONATION_WEIGHT = 25
CONFIRMED_MATCH_BONUS = 5


def insight_severity(score: float) -> str:
    if score > 70:
        return "high"
    if score > 40:
        return "medium"
    return "low"


def record_to_finding(record: ExposureRecord) -> RawFinding:
    """Rebuild a candidate finding from a stored record for re-correlation."""
    meta = record.metadata
    score = record.risk_score
    if score >= 80:
        severity = "critical"
    elif score >= 60:
        severity = "high"
    elif score >= 40:
        severity = "medium"
    else:
        severity = "low"

    return RawFinding(
        source_name=record.source_name,
        source_url=record.source_url,
        source_type=record.source_type,
        matched_fields=meta.matched_fields or record.data_exposed,
        matched_values=meta.matched_values,
        data_exposed=record.data_exposed,
        confidence=meta.confidence or 70,
        severity=severity,
        is_impersonation=meta.is_impersonation,
        explanation=meta.explanation,
    )


class ProfileAssessor:
    """
    Profile-level score combining persisted records with social findings.

    Scoring:
    - Base: mean of (advanced record scores + social severity scores) per exposure
    - Impersonation (social): 25 pts each
    - Confirmed PII match (2+ non-name fields): 5 pts each
    - Frequency: 1.5 pts per record (max 20)
    """

    def __init__(self, tables: WeightTables = DEFAULT_TABLES):
        self.tables = tables
        self.risk_scorer = RiskScorer(tables)

    def _is_confirmed(self, record: ExposureRecord) -> bool:
        fields = record.metadata.matched_fields or record.data_exposed
        non_name = [f for f in fields if not self.tables.is_name_field(f)]
        return len(non_name) >= 2

    def assess(
        self,
        profile_id: str,
        records: list[ExposureRecord],
        social_findings: list[SocialFinding] | None = None,
        correlation: CorrelationResult | None = None,
        as_of: date | None = None,
    ) -> ProfileAssessment:
        social_findings = social_findings or []
        correlation = correlation or CorrelationResult()

        updates = self.risk_scorer.recompute_risk_scores(
            records, correlation.correlation_multiplier, as_of
        )
        total_risk = sum(u.advanced_score for u in updates)

        social_risk = sum(
            SOCIAL_SEVERITY_SCORES.get(f.severity, 30)
            for f in social_findings
            if f.status in OPEN_SOCIAL_STATUSES
        )
        social_impersonations = [f for f in social_findings if f.finding_type in IMPERSONATION_TYPES]
        impersonation_risk = len(social_impersonations) * IMPERSONATION_WEIGHT

        confirmed_bonus = sum(1 for r in records if self._is_confirmed(r)) * CONFIRMED_MATCH_BONUS
        frequency_penalty = min(20, len(records) * 1.5)

        exposure_count = len(records) + len(social_findings)
        base = (total_risk + social_risk) / exposure_count if exposure_count else 0

        raw_score = min(100, base + impersonation_risk + confirmed_bonus + frequency_penalty)
        overall = clamp_score(raw_score)

        counts = {c: 0 for c in Category}
        for record in records:
            counts[categorize(record.source_type)] += 1
        record_impersonations = sum(1 for r in records if r.metadata.is_impersonation)

        snapshot = ProfileRiskSnapshot(
            overall_risk_score=overall,
            exposure_count=exposure_count,
            impersonations=record_impersonations + len(social_impersonations),
            breaches=counts[Category.BREACHES],
            brokers=counts[Category.BROKERS],
            social=counts[Category.SOCIAL],
            osint=counts[Category.OSINT],
            court=counts[Category.COURT],
            high_risk_combinations=correlation.high_risk_combinations,
        )

        return ProfileAssessment(
            profile_id=profile_id,
            overall_risk_score=overall,
            exposure_count=exposure_count,
            insight_severity=insight_severity(raw_score),
            correlation_multiplier=correlation.correlation_multiplier,
            high_risk_combinations=correlation.high_risk_combinations,
            specific_threats=correlation.specific_threats,
            enhanced_results=updates,
            snapshot=snapshot,
        )
