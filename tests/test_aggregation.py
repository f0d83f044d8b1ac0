"""Tests for categorization, the profile score, and the advanced profile assessment."""

from datetime import timedelta

import pytest

from engine import Aggregator, ProfileAssessor, calculate_profile_score, categorize, record_to_finding
from engine.profile import insight_severity
from models import (
    Category,
    CorrelationResult,
    ExposureMetadata,
    ExposureRecord,
    HighRiskCombination,
    SocialFinding,
    ValidatedMatch,
)
from conftest import AS_OF


def match(source_type="news", score=10, severity="low", impersonation=False, name="Source"):
    return ValidatedMatch(
        source_name=name,
        source_url="https://news.site/article",
        source_type=source_type,
        matched_fields=["email"],
        severity=severity,
        is_impersonation=impersonation,
        match_score=score,
    )


class TestCategorize:

    @pytest.mark.parametrize("source_type,category", [
        ("data_broker", Category.BROKERS),
        ("people_finder", Category.BROKERS),
        ("breach_database", Category.BREACHES),
        ("paste", Category.BREACHES),
        ("social_media", Category.SOCIAL),
        ("court_record", Category.COURT),
        ("forum", Category.OSINT),
        ("news", Category.OSINT),
        ("dark_web", Category.OSINT),
        (None, Category.OSINT),
    ])
    def test_mapping(self, source_type, category):
        assert categorize(source_type) == category


class TestProfileScore:

    def test_single_critical_breach_match(self):
        # 100 * 0.4 + breach 10 + volume 2 + critical 10
        result = Aggregator().aggregate([match("breach_database", 100, "critical")])
        assert result.risk_score == 62
        assert result.snapshot.overall_risk_score == 62
        assert result.stats.breaches == 1
        assert result.stats.critical == 1

    def test_empty_input(self):
        result = Aggregator().aggregate([])
        assert result.risk_score == 0
        assert result.stats.total_matches == 0
        assert result.matches == []

    def test_volume_term_capped_at_20(self):
        matches = [match("news", 10, "low", name=f"Forum {i}") for i in range(50)]
        result = Aggregator().aggregate(matches)
        avg_term = 10 * 0.4
        assert result.risk_score == round(avg_term + 20)
        assert result.risk_score - avg_term <= 20

    def test_capped_at_100(self):
        matches = [match("breach_database", 100, "critical", impersonation=True, name=str(i)) for i in range(10)]
        assert Aggregator().aggregate(matches).risk_score == 100

    def test_formula_terms(self):
        assert calculate_profile_score([], 0, 0, 0, 0) == 0
        # avg 50 * 0.4 + 15 + 8 + 4 = 47
        assert calculate_profile_score([40, 60], impersonations=1, breaches=0, brokers=1, criticals=0) == 47

    def test_deterministic(self):
        matches = [match("data_broker", 76, "medium"), match("paste", 40, "high", impersonation=True)]
        assert Aggregator().aggregate(matches) == Aggregator().aggregate(matches)


class TestBuckets:

    def test_impersonation_is_copied_not_moved(self):
        m = match("social_media", 40, "high", impersonation=True)
        result = Aggregator().aggregate([m])
        assert result.impersonation_alerts == [m]
        assert result.social_findings == [m]
        assert result.stats.impersonations == 1
        assert result.stats.social == 1

    def test_every_match_in_exactly_one_category(self):
        matches = [match(t, name=t) for t in (
            "data_broker", "people_finder", "breach_database", "paste",
            "social_media", "court_record", "forum", "other",
        )]
        result = Aggregator().aggregate(matches)
        total = sum(len(b) for b in (
            result.broker_findings, result.breach_findings, result.social_findings,
            result.court_findings, result.osint_findings,
        ))
        assert total == len(matches)
        assert result.stats.brokers == 2
        assert result.stats.breaches == 2
        assert result.stats.court == 1
        assert result.stats.osint == 2

    def test_high_risk_combinations_pass_through(self):
        combo = HighRiskCombination(data_types=["ssn", "dob"], risk_score=90, threat="identity theft")
        result = Aggregator().aggregate([match()], [combo])
        assert result.snapshot.high_risk_combinations == [combo]


def stored(source_name, source_type, data_exposed, days_old, matched_fields, risk_score=50, impersonation=False):
    return ExposureRecord(
        profile_id="profile-1",
        source_name=source_name,
        source_type=source_type,
        data_exposed=data_exposed,
        scan_date=AS_OF - timedelta(days=days_old),
        risk_score=risk_score,
        metadata=ExposureMetadata(matched_fields=matched_fields, is_impersonation=impersonation),
    )


class TestProfileAssessor:

    def test_advanced_profile_score(self):
        records = [
            stored("Breach A", "breach_database", ["email", "ssn"], 10, ["email", "ssn"]),
            stored("Gazette", "news", ["email"], 200, ["full_name", "email"]),
        ]
        social = [
            SocialFinding(platform="twitter", finding_type="exposure", severity="high", status="new"),
            SocialFinding(platform="instagram", finding_type="impersonation", severity="low", status="resolved"),
        ]
        assessment = ProfileAssessor().assess("profile-1", records, social, CorrelationResult(), AS_OF)

        # base (100 + 36 + 70) / 4 = 51.5, + 25 impersonation + 5 confirmed + 3 frequency
        assert [u.advanced_score for u in assessment.enhanced_results] == [100, 36]
        assert assessment.overall_risk_score == 85
        assert assessment.exposure_count == 4
        assert assessment.insight_severity == "high"
        assert assessment.snapshot.breaches == 1
        assert assessment.snapshot.osint == 1
        assert assessment.snapshot.impersonations == 1

    def test_no_exposures(self):
        assessment = ProfileAssessor().assess("profile-1", [], [], None, AS_OF)
        assert assessment.overall_risk_score == 0
        assert assessment.insight_severity == "low"
        assert assessment.correlation_multiplier == 1.0

    def test_frequency_penalty_capped(self):
        records = [stored(f"Broker {i}", "data_broker", [], 400, ["employer"]) for i in range(30)]
        assessment = ProfileAssessor().assess("profile-1", records, [], None, AS_OF)
        assert assessment.overall_risk_score == 20

    def test_correlation_values_reported(self):
        combo = HighRiskCombination(data_types=["ssn", "dob", "address"], risk_score=95, threat="identity theft")
        correlation = CorrelationResult(
            correlation_multiplier=2.0, high_risk_combinations=[combo], specific_threats=["loan fraud"],
        )
        records = [stored("Gazette", "news", ["email"], 200, ["email"])]
        assessment = ProfileAssessor().assess("profile-1", records, [], correlation, AS_OF)
        assert assessment.enhanced_results[0].advanced_score == 72
        assert assessment.correlation_multiplier == 2.0
        assert assessment.high_risk_combinations == [combo]
        assert assessment.specific_threats == ["loan fraud"]

    @pytest.mark.parametrize("score,severity", [(71, "high"), (70, "medium"), (41, "medium"), (40, "low")])
    def test_insight_severity(self, score, severity):
        assert insight_severity(score) == severity


class TestRecordToFinding:

    @pytest.mark.parametrize("risk_score,severity", [
        (85, "critical"), (80, "critical"), (60, "high"), (40, "medium"), (39, "low"),
    ])
    def test_severity_bands(self, risk_score, severity):
        r = stored("Src", "paste", ["email"], 1, ["email"], risk_score=risk_score)
        assert record_to_finding(r).severity == severity

    def test_fields_fall_back_to_data_exposed(self):
        r = stored("Src", "paste", ["email", "phone"], 1, [])
        finding = record_to_finding(r)
        assert finding.matched_fields == ["email", "phone"]
        assert finding.confidence == 70
