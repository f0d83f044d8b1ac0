"""Interfaces for the external collaborators the pipelines call."""

from abc import ABC, abstractmethod

from models.findings import RawFinding, CorrelationResult
from models.records import NotificationAlert
from models.requests import PersonalIdentifiers


class FindingSource(ABC):
    """
    Open intelligence search that returns candidate findings.

    Implementations:
    - Return typed RawFinding objects only, never raw model text
    - Drop items that fail schema validation
    - Raise ProviderError when the search itself fails
    """

    name: str = "Base Finding Source"

    @abstractmethod
    async def search(self, identifiers: PersonalIdentifiers) -> list[RawFinding]:
        pass


class CorrelationProvider(ABC):
    """
    Correlation analysis over co-occurring exposed data types.

    Must never raise: on any failure return CorrelationResult.neutral().
    """

    name: str = "Base Correlation Provider"

    @abstractmethod
    async def analyze(
        self,
        profile_id: str,
        data_types: list[str],
        exposures: list[dict],
    ) -> CorrelationResult:
        pass


class AlertSink(ABC):
    name: str = "Base Alert Sink"

    @abstractmethod
    async def notify(self, alert: NotificationAlert) -> tuple[bool, str | None]:
        """Returns (delivered, error)."""
        pass
