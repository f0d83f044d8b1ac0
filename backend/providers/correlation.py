"""
Correlation analysis client.

The analysis service looks at which data types are exposed together and
returns a multiplier in [1.0, 3.0] plus the high-risk combinations it saw.
Any failure degrades to the neutral result (multiplier 1.0).
"""

import logging

import httpx
from pydantic import ValidationError

from models.findings import CorrelationResult
from .base import CorrelationProvider

logger = logging.getLogger(__name__)

MIN_MULTIPLIER = 1.0
MAX_MULTIPLIER = 3.0


def bound_multiplier(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return MIN_MULTIPLIER
    if value != value:
        return MIN_MULTIPLIER
    return max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, value))


def parse_correlation(payload) -> CorrelationResult:
    """Schema-check an analysis response. Raises ValueError on a bad shape."""
    if not isinstance(payload, dict):
        raise ValueError("correlation payload is not an object")
    try:
        result = CorrelationResult.model_validate({
            "correlation_multiplier": bound_multiplier(payload.get("correlation_multiplier")),
            "high_risk_combinations": payload.get("high_risk_combinations") or [],
            "specific_threats": payload.get("specific_threats") or [],
        })
    except ValidationError as e:
        raise ValueError(f"invalid correlation payload: {e.error_count()} error(s)") from e
    return result


class HTTPCorrelationProvider(CorrelationProvider):
    name = "Correlation Analysis"

    def __init__(
        self,
        api_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    async def analyze(
        self,
        profile_id: str,
        data_types: list[str],
        exposures: list[dict],
    ) -> CorrelationResult:
        headers = {"User-Agent": "VAULTSCORE/1.0"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                resp = await client.post(
                    self.api_url,
                    json={"data_types": data_types, "exposures": exposures},
                    headers=headers,
                    timeout=self.timeout,
                )
            if resp.status_code != 200:
                logger.warning("[%s] Status %s, using neutral multiplier", self.name, resp.status_code)
                return CorrelationResult.neutral()
            return parse_correlation(resp.json())

        except httpx.TimeoutException:
            logger.warning("[%s] Timeout, using neutral multiplier", self.name)
        except httpx.HTTPError as e:
            logger.warning("[%s] %s, using neutral multiplier", self.name, type(e).__name__)
        except ValueError as e:
            logger.warning("[%s] %s, using neutral multiplier", self.name, e)

        return CorrelationResult.neutral()


class FixedCorrelationProvider(CorrelationProvider):
    """Returns a preset result. Used when no analysis service is configured."""

    name = "Fixed Correlation"

    def __init__(self, result: CorrelationResult | None = None):
        self.result = result or CorrelationResult()

    async def analyze(
        self,
        profile_id: str,
        data_types: list[str],
        exposures: list[dict],
    ) -> CorrelationResult:
        return self.result.model_copy(deep=True)
