"""Integration test fixtures.

Integration tests drive the public entry points end to end, with the real
default strategies and structlog logger. Only the blocking sleep is
replaced so tests record delays instead of waiting.
"""

import importlib

import pytest

import persevere.api


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record every blocking sleep performed by the built-in strategies."""
    recorded: list[float] = []
    strategies = importlib.import_module("persevere.retry.strategies")
    monkeypatch.setattr(strategies.time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def api_settings(monkeypatch, test_settings):
    """Point the entry points at zero-delay test settings."""
    monkeypatch.setattr(persevere.api, "settings", test_settings)
    return test_settings
