"""External collaborators: intelligence search, correlation analysis, alerts."""

from .base import FindingSource, CorrelationProvider, AlertSink
from .search import HTTPFindingSource, StaticFindingSource
from .correlation import (
    HTTPCorrelationProvider,
    FixedCorrelationProvider,
    parse_correlation,
    bound_multiplier,
)
from .alerts import (
    StoreAlertSink,
    WebhookAlertSink,
    CompositeAlertSink,
    build_alert,
    should_alert,
)

__all__ = [
    "FindingSource",
    "CorrelationProvider",
    "AlertSink",
    "HTTPFindingSource",
    "StaticFindingSource",
    "HTTPCorrelationProvider",
    "FixedCorrelationProvider",
    "parse_correlation",
    "bound_multiplier",
    "StoreAlertSink",
    "WebhookAlertSink",
    "CompositeAlertSink",
    "build_alert",
    "should_alert",
]
