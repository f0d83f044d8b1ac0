"""Persisted exposure records and the entities stored next to them."""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExposureStatus(str, Enum):
    NEW = "new"
    INVESTIGATING = "investigating"
    REMOVAL_REQUESTED = "removal_requested"
    REMOVED = "removed"
    FALSE_POSITIVE = "false_positive"


class ExposureMetadata(BaseModel):
    matched_fields: list[str] = Field(default_factory=list)
    matched_values: list[str] = Field(default_factory=list)
    confidence: float = 70
    is_impersonation: bool = False
    explanation: str = ""
    scan_type: str = "identity_scan"


class ExposureRecord(BaseModel):
    """
    A scored finding tied to a profile.

    profile_id may be None here; the record store refuses to persist it.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    profile_id: Optional[str] = None
    source_name: str
    source_url: Optional[str] = None
    source_type: str = "other"
    risk_score: int = Field(default=0, ge=0, le=100)
    data_exposed: list[str] = Field(default_factory=list)
    scan_date: Optional[date] = None
    status: ExposureStatus = ExposureStatus.NEW
    metadata: ExposureMetadata = Field(default_factory=ExposureMetadata)

    model_config = ConfigDict(use_enum_values=True)

    @field_validator('source_type', mode='before')
    @classmethod
    def normalize_source_type(cls, v):
        return "other" if v is None else str(v).lower().strip()


class RiskUpdate(BaseModel):
    """New risk values for one record, returned for the caller to persist."""
    id: str
    original_score: int
    advanced_score: int
    sensitivity_score: int
    reputation_multiplier: float
    recency_multiplier: float
    correlation_multiplier: float


SOCIAL_DEFAULTS = {"finding_type": "exposure", "severity": "low", "status": "new"}


class SocialFinding(BaseModel):
    """Social-media monitoring finding, consumed by the profile assessment."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    profile_id: Optional[str] = None
    platform: str = ""
    finding_type: str = "exposure"
    severity: str = "low"
    status: str = "new"

    @field_validator('finding_type', 'severity', 'status', mode='before')
    @classmethod
    def normalize(cls, v, info):
        if v is None:
            return SOCIAL_DEFAULTS[info.field_name]
        return str(v).lower().strip()


class NotificationAlert(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    profile_id: str
    alert_type: str = "high_risk_alert"
    title: str
    message: str
    severity: str
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
