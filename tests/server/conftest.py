"""Pytest fixtures for FastAPI server tests.

The Tradier dependency is replaced by the in-memory gateway, and the
scan clock is pinned to the shared test date.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from bw_scanner.config import ScannerConfig
from bw_scanner.server.main import app, get_gateway, get_scanner_config


@pytest.fixture
def scan_market(gateway, make_bars, make_vix, today, monkeypatch):
    """One OTM ticker with a short chain, VIX at its average."""
    monkeypatch.setattr("bw_scanner.scanner.utc_today", lambda now=None: today)
    gateway.history["VIX"] = make_vix(20.0)
    gateway.add_ticker(
        "FAS",
        make_bars([100.0] * 30 + [95.0], [100.0] * 31),
        spot=95.0,
        chain=[(92.5, 3.9, 4.1), (97.5, 1.9, 2.1)],
    )
    return gateway


@pytest.fixture
def client(scan_market) -> Generator[TestClient, None, None]:
    """Create a test client backed by the in-memory gateway.

    Example:
        >>> def test_scan(client):
        >>>     response = client.get("/api/scan")
        >>>     assert response.status_code == 200
    """

    def override_get_gateway():
        yield scan_market

    app.dependency_overrides[get_gateway] = override_get_gateway
    app.dependency_overrides[get_scanner_config] = lambda: ScannerConfig(tickers=["FAS"])

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client_no_gateway() -> Generator[TestClient, None, None]:
    """Create a test client using the real gateway dependency."""
    with TestClient(app) as test_client:
        yield test_client
