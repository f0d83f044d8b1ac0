"""
Reference weights and multipliers used by the validator and scorers.

All tables are read-only. Components receive a WeightTables instance at
construction; DEFAULT_TABLES holds the canonical values.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping


def _frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


SENSITIVITY_WEIGHTS = _frozen({
    "ssn": 100,
    "passport": 95,
    "drivers_license": 90,
    "credit_card": 90,
    "green_card": 90,
    "bank_account": 85,
    "tax_id": 85,
    "medical_id": 80,
    "dob": 70,
    "address": 60,
    "phone": 50,
    "property_deed": 50,
    "email": 45,
    "full_name": 40,
    "vehicle_vin": 40,
    "username": 30,
    "student_id": 30,
    "employer": 25,
    "relative": 20,
    "alias": 20,
})

# Order matters: labels are matched by substring and the first hit wins,
# so "username" must be tried before "name".
MATCH_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("ssn", 100),
    ("dob", 80),
    ("phone", 70),
    ("email", 65),
    ("address", 60),
    ("username", 55),
    ("alias", 50),
    ("employer", 40),
    ("name", 20),
)

SOURCE_MULTIPLIERS = _frozen({
    "dark_web": 2.5,
    "breach_database": 2.0,
    "data_broker": 1.8,
    "people_finder": 1.7,
    "court_record": 1.6,
    "paste": 1.5,
    "forum": 1.3,
    "public_record": 1.3,
    "social_media": 1.2,
    "news": 1.0,
    "other": 1.0,
})

SEVERITY_MULTIPLIERS = _frozen({
    "critical": 2.5,
    "high": 1.8,
    "medium": 1.3,
    "low": 1.0,
})

# (exclusive upper bound in days, multiplier), checked in order
RECENCY_BANDS: tuple[tuple[float, float], ...] = (
    (30, 1.3),
    (90, 1.1),
)

STRONG_FIELDS = frozenset({"email", "phone", "username", "ssn", "dob", "address", "alias"})

PLACEHOLDER_DOMAINS = frozenset({
    "example.com",
    "example.org",
    "example.net",
    "test.com",
    "placeholder.com",
    "localhost",
})

RESERVED_TLDS = frozenset({"example", "test", "invalid", "localhost"})


@dataclass(frozen=True)
class WeightTables:
    sensitivity_weights: Mapping[str, int] = field(default_factory=lambda: SENSITIVITY_WEIGHTS)
    match_weights: tuple[tuple[str, int], ...] = MATCH_WEIGHTS
    source_multipliers: Mapping[str, float] = field(default_factory=lambda: SOURCE_MULTIPLIERS)
    severity_multipliers: Mapping[str, float] = field(default_factory=lambda: SEVERITY_MULTIPLIERS)
    recency_bands: tuple[tuple[float, float], ...] = RECENCY_BANDS
    strong_fields: frozenset = STRONG_FIELDS
    placeholder_domains: frozenset = PLACEHOLDER_DOMAINS
    reserved_tlds: frozenset = RESERVED_TLDS

    default_sensitivity: int = 30
    default_multiplier: float = 1.0
    default_recency_multiplier: float = 1.0
    missing_date_days: float = 30

    def sensitivity_weight(self, data_type: str | None) -> int:
        key = (data_type or "").lower().strip()
        return self.sensitivity_weights.get(key, self.default_sensitivity)

    def match_weight(self, field_label: str | None) -> int:
        label = (field_label or "").lower()
        for key, weight in self.match_weights:
            if key in label:
                return weight
        return 0

    def source_multiplier(self, source_type: str | None) -> float:
        key = (source_type or "").lower().strip()
        return self.source_multipliers.get(key, self.default_multiplier)

    def severity_multiplier(self, severity: str | None) -> float:
        key = (severity or "").lower().strip()
        return self.severity_multipliers.get(key, self.default_multiplier)

    def recency_multiplier(self, days_since: float | None) -> float:
        days = self.missing_date_days if days_since is None else days_since
        for upper, multiplier in self.recency_bands:
            if days < upper:
                return multiplier
        return self.default_recency_multiplier

    def is_strong_field(self, field_label: str | None) -> bool:
        label = (field_label or "").lower()
        return any(strong in label for strong in self.strong_fields)

    def is_name_field(self, field_label: str | None) -> bool:
        label = (field_label or "").lower()
        return "name" in label and not self.is_strong_field(label)

    def is_placeholder_host(self, host: str) -> bool:
        host = host.lower().rstrip(".")
        if host.rsplit(".", 1)[-1] in self.reserved_tlds:
            return True
        return any(host == d or host.endswith("." + d) for d in self.placeholder_domains)

    def with_overrides(
        self,
        source_multipliers: dict[str, float] | None = None,
        severity_multipliers: dict[str, float] | None = None,
    ) -> "WeightTables":
        """Return a copy with some multipliers replaced."""
        changes = {}
        if source_multipliers:
            changes["source_multipliers"] = _frozen({**self.source_multipliers, **source_multipliers})
        if severity_multipliers:
            changes["severity_multipliers"] = _frozen({**self.severity_multipliers, **severity_multipliers})
        return replace(self, **changes) if changes else self

    @classmethod
    def from_settings(cls, settings) -> "WeightTables":
        return DEFAULT_TABLES.with_overrides(
            source_multipliers={"forum": settings.FORUM_MULTIPLIER},
        )


DEFAULT_TABLES = WeightTables()
