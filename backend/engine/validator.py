"""
Matching rules that decide whether a candidate finding is really about the person.

A single strong identifier (email, phone, SSN, ...) is enough on its own. A
name is not: common names produce too many false positives, so a name match
needs at least two other matched fields from the same source.
"""

from enum import Enum
from urllib.parse import urlparse

from models.findings import RawFinding, ValidatedMatch
from .tables import WeightTables, DEFAULT_TABLES


class RejectionReason(str, Enum):
    MISSING_SOURCE = "missing_source"
    PLACEHOLDER_SOURCE = "placeholder_source"
    INVALID_CONFIDENCE = "invalid_confidence"
    LOW_CONFIDENCE = "low_confidence"
    NO_MATCHED_FIELDS = "no_matched_fields"
    NAME_ONLY = "name_only"
    NAME_UNCORROBORATED = "name_uncorroborated"
    WEAK_MATCH = "weak_match"


class FindingValidator:
    """
    Applies the rejection rules in order:

    1. source_url missing or a placeholder domain
    2. confidence outside [0, 100] or non-finite, or below the threshold
    3. no matched fields
    4. name-only, or a name with fewer than 2 corroborating fields
    5. no strong field and fewer than 2 fields overall
    """

    def __init__(self, tables: WeightTables = DEFAULT_TABLES, min_confidence: float = 50):
        self.tables = tables
        self.min_confidence = min_confidence

    def _check_source(self, source_url: str | None) -> RejectionReason | None:
        url = (source_url or "").strip()
        if not url:
            return RejectionReason.MISSING_SOURCE

        parsed = urlparse(url if "://" in url else f"http://{url}")
        host = parsed.hostname
        if not host:
            return RejectionReason.MISSING_SOURCE
        if self.tables.is_placeholder_host(host):
            return RejectionReason.PLACEHOLDER_SOURCE
        return None

    def check_identity(self, raw: RawFinding) -> RejectionReason | None:
        """Field rules only (3 to 5). Used where the finding has no provenance to check."""
        fields = raw.matched_fields
        if not fields:
            return RejectionReason.NO_MATCHED_FIELDS

        name_fields = [f for f in fields if self.tables.is_name_field(f)]
        other_fields = [f for f in fields if not self.tables.is_name_field(f)]

        if name_fields and not other_fields:
            return RejectionReason.NAME_ONLY
        if name_fields and len(other_fields) < 2:
            return RejectionReason.NAME_UNCORROBORATED

        has_strong = any(self.tables.is_strong_field(f) for f in fields)
        if not has_strong and len(fields) < 2:
            return RejectionReason.WEAK_MATCH
        return None

    def check(self, raw: RawFinding) -> RejectionReason | None:
        """Return why the finding would be rejected, or None if it passes."""
        reason = self._check_source(raw.source_url)
        if reason:
            return reason
        if not 0 <= raw.confidence <= 100:
            return RejectionReason.INVALID_CONFIDENCE
        if raw.confidence < self.min_confidence:
            return RejectionReason.LOW_CONFIDENCE
        return self.check_identity(raw)

    def validate(self, raw: RawFinding) -> ValidatedMatch | None:
        """Promote a passing finding to a ValidatedMatch (score not yet applied)."""
        if self.check(raw) is not None:
            return None
        return ValidatedMatch(**raw.model_dump())
