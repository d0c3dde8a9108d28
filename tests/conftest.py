"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tradejournal.api.app import create_app
from tradejournal.config.settings import Settings
from tradejournal.storage.store import TradeStore


@pytest.fixture
def trades_path(tmp_path: Path) -> Path:
    """Path of the trades document inside a temp directory."""
    return tmp_path / "data" / "trades.json"


@pytest.fixture
def store(trades_path: Path) -> TradeStore:
    """Create an empty trade store."""
    return TradeStore(trades_path)


@pytest.fixture
def sample_trades() -> list[dict]:
    """Journal trades with mixed outcomes."""
    return [
        {"id": "1", "symbol": "AAPL", "status": "win", "result": 100},
        {"id": "2", "symbol": "MSFT", "status": "win", "result": 50},
        {"id": "3", "symbol": "NVDA", "status": "loss", "result": -30},
        {"id": "4", "symbol": "TSLA", "status": "other"},
    ]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temp data directory."""
    return Settings(_env_file=None, data_dir=tmp_path / "data", log_to_file=False)


@pytest.fixture
def client(store: TradeStore, settings: Settings) -> TestClient:
    """HTTP client for an app serving the temp store."""
    return TestClient(create_app(store=store, settings=settings))
