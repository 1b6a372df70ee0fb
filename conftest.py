"""Pytest configuration shared by all test modules."""

import pytest


@pytest.fixture(autouse=True)
def _trace_disabled(monkeypatch):
    """Run every test with tracing off unless the test turns it on."""
    monkeypatch.delenv("BOXTABLES_TRACE_LOG", raising=False)
