"""Shared test fixtures for all test modules."""

import pytest

from logwire.core.insert_id import InsertIdGenerator


class CountingGenerator(InsertIdGenerator):
    """InsertIdGenerator on a frozen clock that counts its calls."""

    def __init__(self) -> None:
        super().__init__(clock=lambda: 1577836800.0, salt="00000000")
        self.calls = 0

    def next(self) -> str:
        self.calls += 1
        return super().next()


@pytest.fixture
def counting_generator() -> CountingGenerator:
    """Provide an insert id generator that records how often it is used."""
    return CountingGenerator()


@pytest.fixture
def grpc_text_record() -> dict[str, object]:
    """An API record as returned by the gRPC entries.list call."""
    return {
        "logName": "projects/demo/logs/syslog",
        "resource": {"type": "global", "labels": {"project_id": "demo"}},
        "insertId": "0001577836800000abcdef01000000000001",
        "severity": "WARNING",
        "payload": "textPayload",
        "textPayload": "disk almost full",
        "timestamp": {"seconds": "1577836800", "nanos": 123456000},
    }
