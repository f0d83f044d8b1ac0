"""Match score for validated findings."""

from models.findings import ValidatedMatch
from .tables import WeightTables, DEFAULT_TABLES
from .utils import clamp_score


class MatchScorer:
    """
    Scoring:
        raw   = sum of field match weights (first substring hit per field)
        final = min(100, raw * source multiplier * severity multiplier * 0.5)

    Returns:
        int in [0, 100]
    """

    DAMPING = 0.5

    def __init__(self, tables: WeightTables = DEFAULT_TABLES):
        self.tables = tables

    def raw_weight(self, fields: list[str]) -> int:
        return sum(self.tables.match_weight(f) for f in fields)

    def score(self, match: ValidatedMatch) -> int:
        raw = self.raw_weight(match.matched_fields)
        source = self.tables.source_multiplier(match.source_type)
        severity = self.tables.severity_multiplier(match.severity)
        return clamp_score(min(100, raw * source * severity * self.DAMPING))

    def apply(self, match: ValidatedMatch) -> ValidatedMatch:
        """Copy of the match with match_score filled in."""
        return match.model_copy(update={"match_score": self.score(match)})
