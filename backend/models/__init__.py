from .findings import (
    RawFinding, ValidatedMatch, Severity, SourceType, Category,
    HighRiskCombination, CorrelationResult,
)
from .records import (
    ExposureRecord, ExposureMetadata, ExposureStatus, RiskUpdate,
    SocialFinding, NotificationAlert,
)
from .assessment import ProfileRiskSnapshot, ScanStats, AggregationResult, ProfileAssessment
from .requests import PersonalIdentifiers, IdentityScanRequest, RiskRecomputeRequest
from .responses import (
    PersistenceSummary, IdentityScanResponse, RiskRecomputeResponse,
    ExposureListResponse, AlertListResponse, HealthResponse,
)

__all__ = [
    "RawFinding", "ValidatedMatch", "Severity", "SourceType", "Category",
    "HighRiskCombination", "CorrelationResult",
    "ExposureRecord", "ExposureMetadata", "ExposureStatus", "RiskUpdate",
    "SocialFinding", "NotificationAlert",
    "ProfileRiskSnapshot", "ScanStats", "AggregationResult", "ProfileAssessment",
    "PersonalIdentifiers", "IdentityScanRequest", "RiskRecomputeRequest",
    "PersistenceSummary", "IdentityScanResponse", "RiskRecomputeResponse",
    "ExposureListResponse", "AlertListResponse", "HealthResponse",
]
