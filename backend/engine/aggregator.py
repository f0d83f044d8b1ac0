"""Categorize validated matches and roll them into one profile score."""

from models.findings import ValidatedMatch, Category, HighRiskCombination, Severity
from models.assessment import AggregationResult, ProfileRiskSnapshot, ScanStats
from .utils import clamp_score

CATEGORY_BY_SOURCE = {
    "data_broker": Category.BROKERS,
    "people_finder": Category.BROKERS,
    "breach_database": Category.BREACHES,
    "paste": Category.BREACHES,
    "social_media": Category.SOCIAL,
    "court_record": Category.COURT,
}


def categorize(source_type: str | None) -> Category:
    return CATEGORY_BY_SOURCE.get((source_type or "").lower(), Category.OSINT)


def calculate_profile_score(
    match_scores: list[int],
    impersonations: int,
    breaches: int,
    brokers: int,
    criticals: int,
) -> int:
    """
    Additive profile score, every term visible to an analyst.

    Scoring:
    - Average match score: x 0.4
    - Impersonation: 15 pts each
    - Breach: 10 pts each
    - Broker listing: 8 pts each
    - Volume: 2 pts per match (max 20)
    - Critical severity: 10 pts each

    Returns:
        int in [0, 100]
    """
    avg_match = sum(match_scores) / len(match_scores) if match_scores else 0

    score = avg_match * 0.4
    score += impersonations * 15
    score += breaches * 10
    score += brokers * 8
    score += min(20, len(match_scores) * 2)
    score += criticals * 10

    return clamp_score(min(100, score))


class Aggregator:

    def aggregate(
        self,
        matches: list[ValidatedMatch],
        high_risk_combinations: list[HighRiskCombination] | None = None,
    ) -> AggregationResult:
        buckets: dict[Category, list[ValidatedMatch]] = {c: [] for c in Category}
        impersonation_alerts = []

        for match in matches:
            if match.is_impersonation:
                impersonation_alerts.append(match)
            buckets[categorize(match.source_type)].append(match)

        severity_counts = {s.value: 0 for s in Severity}
        for match in matches:
            if match.severity in severity_counts:
                severity_counts[match.severity] += 1

        risk_score = calculate_profile_score(
            [m.match_score for m in matches],
            impersonations=len(impersonation_alerts),
            breaches=len(buckets[Category.BREACHES]),
            brokers=len(buckets[Category.BROKERS]),
            criticals=severity_counts[Severity.CRITICAL.value],
        )

        stats = ScanStats(
            total_matches=len(matches),
            impersonations=len(impersonation_alerts),
            breaches=len(buckets[Category.BREACHES]),
            brokers=len(buckets[Category.BROKERS]),
            social=len(buckets[Category.SOCIAL]),
            osint=len(buckets[Category.OSINT]),
            court=len(buckets[Category.COURT]),
            **severity_counts,
        )

        snapshot = ProfileRiskSnapshot(
            overall_risk_score=risk_score,
            exposure_count=len(matches),
            impersonations=stats.impersonations,
            breaches=stats.breaches,
            brokers=stats.brokers,
            social=stats.social,
            osint=stats.osint,
            court=stats.court,
            high_risk_combinations=list(high_risk_combinations or []),
        )

        return AggregationResult(
            matches=list(matches),
            impersonation_alerts=impersonation_alerts,
            broker_findings=buckets[Category.BROKERS],
            breach_findings=buckets[Category.BREACHES],
            social_findings=buckets[Category.SOCIAL],
            osint_findings=buckets[Category.OSINT],
            court_findings=buckets[Category.COURT],
            risk_score=risk_score,
            snapshot=snapshot,
            stats=stats,
        )
