"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from core.rules import DEFAULT_RATES
from store.history import QuoteHistory
from web.api import app, get_history, get_rates


@pytest.fixture
def history(tmp_path):
    return QuoteHistory(tmp_path / "history")


@pytest.fixture
def client(history):
    app.dependency_overrides[get_history] = lambda: history
    app.dependency_overrides[get_rates] = lambda: DEFAULT_RATES
    yield TestClient(app)
    app.dependency_overrides.clear()
