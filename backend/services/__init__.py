from config import settings
from engine import WeightTables
from providers import (
    AlertSink,
    CompositeAlertSink,
    CorrelationProvider,
    FindingSource,
    HTTPCorrelationProvider,
    HTTPFindingSource,
    StoreAlertSink,
    WebhookAlertSink,
)
from storage import RecordStore, record_store
from .pipeline import AuditLog, IdentityScanPipeline, RiskRecomputePipeline


def _build_search() -> FindingSource | None:
    if not settings.SEARCH_API_URL:
        return None
    return HTTPFindingSource(
        settings.SEARCH_API_URL,
        api_key=settings.SEARCH_API_KEY,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )


def _build_correlation() -> CorrelationProvider | None:
    if not settings.CORRELATION_API_URL:
        return None
    return HTTPCorrelationProvider(
        settings.CORRELATION_API_URL,
        api_key=settings.CORRELATION_API_KEY,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )


def _build_alerts(store: RecordStore) -> AlertSink:
    sinks: list[AlertSink] = [StoreAlertSink(store)]
    if settings.ALERT_WEBHOOK_URL:
        sinks.append(WebhookAlertSink(settings.ALERT_WEBHOOK_URL))
    return CompositeAlertSink(sinks)


tables = WeightTables.from_settings(settings)

identity_scan_pipeline = IdentityScanPipeline(
    record_store,
    tables=tables,
    min_confidence=settings.MIN_CONFIDENCE,
    strict_min_confidence=settings.STRICT_MIN_CONFIDENCE,
    search=_build_search(),
    correlation=_build_correlation(),
    alerts=_build_alerts(record_store),
)

risk_recompute_pipeline = RiskRecomputePipeline(
    record_store,
    tables=tables,
    correlation=_build_correlation(),
)

__all__ = [
    "AuditLog",
    "IdentityScanPipeline",
    "RiskRecomputePipeline",
    "identity_scan_pipeline",
    "risk_recompute_pipeline",
]
