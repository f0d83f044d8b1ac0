"""
HTTP client for the open intelligence search service.

The service takes the vault identifiers and answers with
{"findings": [...]} in the RawFinding shape. Each item is validated on its
own so one malformed finding does not sink the batch.
"""

import logging

import httpx
from pydantic import ValidationError

from engine.errors import ProviderError
from models.findings import RawFinding
from models.requests import PersonalIdentifiers
from .base import FindingSource

logger = logging.getLogger(__name__)


class HTTPFindingSource(FindingSource):
    name = "Intelligence Search"

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

    def _headers(self) -> dict:
        headers = {"User-Agent": "VAULTSCORE/1.0"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _parse(self, payload) -> list[RawFinding]:
        if not isinstance(payload, dict):
            raise ProviderError(self.name, "response is not a JSON object")

        items = payload.get("findings") or []
        if not isinstance(items, list):
            raise ProviderError(self.name, "'findings' is not a list")

        findings = []
        dropped = 0
        for item in items:
            try:
                findings.append(RawFinding.model_validate(item))
            except ValidationError:
                dropped += 1

        if dropped:
            logger.warning("[%s] Dropped %d malformed finding(s)", self.name, dropped)
        return findings

    async def search(self, identifiers: PersonalIdentifiers) -> list[RawFinding]:
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                resp = await client.post(
                    self.api_url,
                    json=identifiers.model_dump(),
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            except httpx.TimeoutException:
                raise ProviderError(self.name, "request timed out")
            except httpx.HTTPError as e:
                raise ProviderError(self.name, f"request failed ({type(e).__name__})")

        if resp.status_code == 429:
            raise ProviderError(self.name, "rate limited")
        if resp.status_code != 200:
            raise ProviderError(self.name, f"unexpected status {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError:
            raise ProviderError(self.name, "response is not JSON")

        findings = self._parse(payload)
        logger.info("[%s] Received %d candidate finding(s)", self.name, len(findings))
        return findings


class StaticFindingSource(FindingSource):
    """Serves a fixed list of findings. Used for demos and tests."""

    name = "Static Findings"

    def __init__(self, findings: list[RawFinding] | None = None):
        self.findings = list(findings or [])

    async def search(self, identifiers: PersonalIdentifiers) -> list[RawFinding]:
        return [f.model_copy() for f in self.findings]
