"""
API tests for portfolio and report endpoints.

Tests cover:
- Portfolio summary and per-symbol details
- Rebuild endpoint
- Realized P/L history, monthly, yearly and script-wise reports
- Health check
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def traded(client: TestClient) -> TestClient:
    """TRG partly sold and OGDC fully sold, all in early 2024."""
    trades = [
        ("2024-01-10", "TRG", "BUY", 100, "85.50"),
        ("2024-01-12", "OGDC", "BUY", 10, "120"),
        ("2024-02-01", "TRG", "SELL", 50, "92"),
        ("2024-03-05", "OGDC", "SELL", 10, "130"),
    ]
    for trade_date, symbol, side, quantity, rate in trades:
        response = client.post("/transactions", json={
            "trade_date": trade_date,
            "symbol": symbol,
            "txn_type": side,
            "quantity": quantity,
            "rate": rate,
        })
        assert response.status_code == 201
    return client


# =============================================================================
# PORTFOLIO TESTS
# =============================================================================


class TestPortfolioAPI:
    """Tests for /portfolio endpoints."""

    def test_empty_portfolio(self, client: TestClient):
        data = client.get("/portfolio").json()

        assert data["holdings"] == []
        assert data["active_symbol_count"] == 0

    def test_summary_lists_open_holdings(self, traded: TestClient):
        """
        GIVEN TRG open and OGDC closed
        WHEN I GET /portfolio
        THEN only TRG is listed but totals include OGDC
        """
        data = traded.get("/portfolio").json()

        assert [h["symbol"] for h in data["holdings"]] == ["TRG"]
        assert data["active_symbol_count"] == 1
        assert data["total_shares_held"] == 50
        assert Decimal(data["total_invested"]) == Decimal("9767.37")
        assert Decimal(data["total_recovered"]) == Decimal("5889.52")
        assert Decimal(data["total_realized_pnl"]) == Decimal("404.775")

    def test_summary_include_closed(self, traded: TestClient):
        data = traded.get("/portfolio", params={"include_closed": True}).json()
        assert [h["symbol"] for h in data["holdings"]] == ["OGDC", "TRG"]

    def test_symbol_details(self, traded: TestClient):
        data = traded.get("/portfolio/trg").json()

        assert data["holding"]["symbol"] == "TRG"
        assert Decimal(data["holding"]["avg_cost_per_share"]) == Decimal("85.6525")
        assert [t["txn_type"] for t in data["transactions"]] == ["SELL", "BUY"]
        assert len(data["realized_pnl"]) == 1

    def test_unknown_symbol_is_not_found(self, client: TestClient):
        response = client.get("/portfolio/NOPE")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_rebuild_keeps_state(self, traded: TestClient):
        before = traded.get("/portfolio", params={"include_closed": True}).json()

        response = traded.post("/portfolio/rebuild")

        assert response.status_code == 200
        assert response.json()["rebuilt_symbols"] == ["OGDC", "TRG"]
        after = traded.get("/portfolio", params={"include_closed": True}).json()
        for old, new in zip(before["holdings"], after["holdings"]):
            assert old["available_quantity"] == new["available_quantity"]
            assert Decimal(old["avg_cost_per_share"]) == Decimal(new["avg_cost_per_share"])
            assert Decimal(old["total_realized_pnl"]) == Decimal(new["total_realized_pnl"])


# =============================================================================
# REPORT TESTS
# =============================================================================


class TestReportsAPI:
    """Tests for /reports endpoints."""

    def test_realized_pnl_history(self, traded: TestClient):
        data = traded.get("/reports/realized-pnl").json()

        assert [r["symbol"] for r in data["records"]] == ["OGDC", "TRG"]
        assert Decimal(data["total_realized_pnl"]) == Decimal("404.775")

    def test_realized_pnl_filter_by_symbol(self, traded: TestClient):
        data = traded.get("/reports/realized-pnl", params={"symbol": "TRG"}).json()

        assert len(data["records"]) == 1
        assert Decimal(data["records"][0]["realized_pnl"]) == Decimal("309.185")

    def test_monthly(self, traded: TestClient):
        months = traded.get("/reports/monthly", params={"year": 2024}).json()

        assert [(m["year"], m["month"]) for m in months] == [(2024, 2), (2024, 3)]
        assert months[0]["sell_count"] == 1

    def test_yearly(self, traded: TestClient):
        data = traded.get("/reports/yearly/2024").json()

        assert data["total_transactions"] == 4
        assert Decimal(data["total_pnl"]) == Decimal("404.775")
        assert Decimal(data["total_charges"]) == Decimal("15.25") + Decimal("2.12") + Decimal("8.19") + Decimal("2.29")
        assert len(data["monthly_breakdown"]) == 2

    def test_yearly_invalid_year(self, client: TestClient):
        assert client.get("/reports/yearly/0").status_code == 400

    def test_script_wise(self, traded: TestClient):
        scripts = traded.get("/reports/script-wise").json()

        assert [s["symbol"] for s in scripts] == ["OGDC", "TRG"]
        trg = scripts[1]
        assert trg["total_quantity_traded"] == 150
        assert Decimal(trg["avg_buy_rate"]) == Decimal("85.5")
        assert Decimal(trg["avg_sell_rate"]) == Decimal("92")


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root_describes_api(client: TestClient):
    data = client.get("/").json()

    assert data["docs"] == "/docs"
    assert data["version"] == "0.1.0"
