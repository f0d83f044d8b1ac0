"""Shared fixtures for engine, pipeline and API tests."""

from datetime import date

import pytest

from models import RawFinding
from storage import InMemoryRecordStore

AS_OF = date(2025, 6, 1)


def make_finding(**overrides) -> RawFinding:
    data = {
        "source_name": "ExampleBroker",
        "source_url": "https://www.spokeo.com/listing/123",
        "source_type": "data_broker",
        "matched_fields": ["email"],
        "matched_values": ["jane@mail.test"],
        "data_exposed": ["email", "address"],
        "confidence": 80,
        "severity": "medium",
        "is_impersonation": False,
        "explanation": "Listing shows the monitored email",
    }
    data.update(overrides)
    return RawFinding(**data)


@pytest.fixture
def finding_factory():
    return make_finding


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def as_of():
    return AS_OF
