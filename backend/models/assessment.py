"""Aggregate risk views over a profile's findings."""

from pydantic import BaseModel, Field

from .findings import ValidatedMatch, HighRiskCombination
from .records import RiskUpdate


class ProfileRiskSnapshot(BaseModel):
    overall_risk_score: int = Field(default=0, ge=0, le=100)
    exposure_count: int = 0
    impersonations: int = 0
    breaches: int = 0
    brokers: int = 0
    social: int = 0
    osint: int = 0
    court: int = 0
    high_risk_combinations: list[HighRiskCombination] = Field(default_factory=list)


class ScanStats(BaseModel):
    total_matches: int = 0
    impersonations: int = 0
    breaches: int = 0
    brokers: int = 0
    social: int = 0
    osint: int = 0
    court: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class AggregationResult(BaseModel):
    """Categorized matches plus the profile-level score."""
    matches: list[ValidatedMatch] = Field(default_factory=list)
    impersonation_alerts: list[ValidatedMatch] = Field(default_factory=list)
    broker_findings: list[ValidatedMatch] = Field(default_factory=list)
    breach_findings: list[ValidatedMatch] = Field(default_factory=list)
    social_findings: list[ValidatedMatch] = Field(default_factory=list)
    osint_findings: list[ValidatedMatch] = Field(default_factory=list)
    court_findings: list[ValidatedMatch] = Field(default_factory=list)
    risk_score: int = Field(default=0, ge=0, le=100)
    snapshot: ProfileRiskSnapshot = Field(default_factory=ProfileRiskSnapshot)
    stats: ScanStats = Field(default_factory=ScanStats)


class ProfileAssessment(BaseModel):
    """Advanced profile score over persisted records and social findings."""
    profile_id: str
    overall_risk_score: int = Field(default=0, ge=0, le=100)
    exposure_count: int = 0
    insight_severity: str = "low"
    correlation_multiplier: float = 1.0
    high_risk_combinations: list[HighRiskCombination] = Field(default_factory=list)
    specific_threats: list[str] = Field(default_factory=list)
    enhanced_results: list[RiskUpdate] = Field(default_factory=list)
    snapshot: ProfileRiskSnapshot = Field(default_factory=ProfileRiskSnapshot)
