"""Numeric helpers shared by the scorers."""

import logging
import math

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching how scores are displayed."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    """Round and clamp a score into [low, high]. NaN collapses to low."""
    if value != value:
        logger.error("Score computation produced NaN, clamping to %s", low)
        return low
    if value < low:
        logger.error("Score computation produced %.2f below %s, clamping", value, low)
    return max(low, min(high, round_half_up(value)))
