"""Data models for identity findings."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from enum import Enum


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SourceType(str, Enum):
    BREACH_DATABASE = "breach_database"
    DATA_BROKER = "data_broker"
    PEOPLE_FINDER = "people_finder"
    SOCIAL_MEDIA = "social_media"
    COURT_RECORD = "court_record"
    PASTE = "paste"
    FORUM = "forum"
    NEWS = "news"
    OTHER = "other"


class Category(str, Enum):
    """Mutually exclusive threat buckets, keyed off source_type."""
    BROKERS = "brokers"
    BREACHES = "breaches"
    SOCIAL = "social"
    COURT = "court"
    OSINT = "osint"


class RawFinding(BaseModel):
    """
    An unvalidated candidate match produced by an external search.

    source_type and severity stay plain strings so unknown values survive
    parsing and degrade to default weights instead of failing validation.
    """
    source_name: str = ""
    source_url: Optional[str] = None
    source_type: str = SourceType.OTHER.value
    matched_fields: list[str] = Field(default_factory=list)
    matched_values: list[str] = Field(default_factory=list)
    data_exposed: list[str] = Field(default_factory=list)
    confidence: float = 70
    severity: str = Severity.LOW.value
    is_impersonation: bool = False
    explanation: str = ""

    @field_validator('source_type', 'severity', mode='before')
    @classmethod
    def normalize_label(cls, v, info):
        if v is None:
            return SourceType.OTHER.value if info.field_name == 'source_type' else Severity.LOW.value
        return str(v).lower().strip()

    @field_validator('matched_fields', 'data_exposed', mode='before')
    @classmethod
    def normalize_fields(cls, v):
        # A bare string is one label, not a sequence of characters.
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [str(f).lower().strip() for f in v if f is not None and str(f).strip()]

    @field_validator('matched_values', mode='before')
    @classmethod
    def drop_empty_values(cls, v):
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [str(x) for x in v if x is not None]

    @field_validator('confidence', mode='before')
    @classmethod
    def default_confidence(cls, v):
        return 70 if v is None else v

    @field_validator('is_impersonation', mode='before')
    @classmethod
    def default_impersonation(cls, v):
        return bool(v) if v is not None else False

    @field_validator('explanation', 'source_name', mode='before')
    @classmethod
    def default_text(cls, v):
        return "" if v is None else v


class ValidatedMatch(RawFinding):
    """A RawFinding that passed the matching rules, with its match score."""
    match_score: int = Field(default=0, ge=0, le=100)


class HighRiskCombination(BaseModel):
    data_types: list[str] = Field(default_factory=list)
    risk_score: float = 0
    threat: str = ""


class CorrelationResult(BaseModel):
    """Output of the correlation analysis collaborator, already schema-checked."""
    correlation_multiplier: float = 1.0
    high_risk_combinations: list[HighRiskCombination] = Field(default_factory=list)
    specific_threats: list[str] = Field(default_factory=list)
    degraded: bool = False

    @classmethod
    def neutral(cls) -> "CorrelationResult":
        return cls(degraded=True)
