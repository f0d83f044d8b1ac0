"""Identity finding validation and risk scoring engine."""

from .tables import WeightTables, DEFAULT_TABLES
from .validator import FindingValidator, RejectionReason
from .match_scorer import MatchScorer
from .risk_scorer import RiskScorer, days_since
from .aggregator import Aggregator, categorize, calculate_profile_score
from .profile import ProfileAssessor, record_to_finding, insight_severity
from .errors import EngineError, ContractViolation, RecordNotFound, ProviderError

__all__ = [
    "WeightTables",
    "DEFAULT_TABLES",
    "FindingValidator",
    "RejectionReason",
    "MatchScorer",
    "RiskScorer",
    "days_since",
    "Aggregator",
    "categorize",
    "calculate_profile_score",
    "ProfileAssessor",
    "record_to_finding",
    "insight_severity",
    "EngineError",
    "ContractViolation",
    "RecordNotFound",
    "ProviderError",
]
