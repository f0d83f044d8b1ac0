import logging
from typing import Optional

import httpx

from models.assessment import ScanStats
from models.records import NotificationAlert
from storage import RecordStore
from .base import AlertSink

logger = logging.getLogger(__name__)


def should_alert(stats: ScanStats) -> bool:
    return stats.critical > 0 or stats.impersonations > 0


def build_alert(profile_id: str, stats: ScanStats) -> NotificationAlert:
    return NotificationAlert(
        profile_id=profile_id,
        alert_type="high_risk_alert",
        title=f"Identity Scan: {stats.critical} Critical Exposures Found",
        message=(
            f"Found {stats.total_matches} matches across web sources. "
            f"{stats.impersonations} possible impersonation(s) detected."
        ),
        severity="critical" if stats.critical > 0 else "high",
    )


class StoreAlertSink(AlertSink):
    """Records the alert next to the profile's exposures."""

    name = "Alert Store"

    def __init__(self, store: RecordStore):
        self.store = store

    async def notify(self, alert: NotificationAlert) -> tuple[bool, Optional[str]]:
        self.store.add_alert(alert)
        return True, None


class WebhookAlertSink(AlertSink):
    name = "Alert Webhook"

    def __init__(self, url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def notify(self, alert: NotificationAlert) -> tuple[bool, Optional[str]]:
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                resp = await client.post(
                    self.url,
                    json=alert.model_dump(mode="json"),
                    timeout=self.timeout,
                )
                if resp.status_code in (200, 201, 202, 204):
                    return True, None
                return False, f"Webhook failed: {resp.status_code}"
        except httpx.HTTPError as e:
            return False, f"Webhook failed: {type(e).__name__}"


class CompositeAlertSink(AlertSink):
    """Fans an alert out to several sinks; delivered if any of them succeeded."""

    name = "Alert Fan-out"

    def __init__(self, sinks: list[AlertSink]):
        self.sinks = sinks

    async def notify(self, alert: NotificationAlert) -> tuple[bool, Optional[str]]:
        delivered = False
        errors = []
        for sink in self.sinks:
            ok, error = await sink.notify(alert)
            if ok:
                delivered = True
            else:
                logger.warning("[%s] %s", sink.name, error)
                errors.append(error)
        return delivered, "; ".join(e for e in errors if e) or None
