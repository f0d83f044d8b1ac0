from pydantic import BaseModel, Field
from datetime import datetime

from .assessment import AggregationResult, ProfileAssessment
from .records import ExposureRecord, NotificationAlert


class PersistenceSummary(BaseModel):
    created: int = 0
    updated: int = 0
    refused: int = 0


class IdentityScanResponse(AggregationResult):
    success: bool = True
    profile_id: str
    rejected: int = 0
    rejection_reasons: dict[str, int] = Field(default_factory=dict)
    persisted: PersistenceSummary = Field(default_factory=PersistenceSummary)
    alert_sent: bool = False
    audit_log: list[str] = Field(default_factory=list)


class RiskRecomputeResponse(ProfileAssessment):
    success: bool = True
    updated: int = 0
    audit_log: list[str] = Field(default_factory=list)


class ExposureListResponse(BaseModel):
    success: bool = True
    profile_id: str
    exposures: list[ExposureRecord]


class AlertListResponse(BaseModel):
    success: bool = True
    profile_id: str
    alerts: list[NotificationAlert]


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    search_configured: bool = False
    correlation_configured: bool = False
