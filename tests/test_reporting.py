"""Tests for report frames, text rendering and CSV export."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pandas as pd

from engine.trade_engine import buy
from market.stock import Stock
from market.stock_market import StockMarket
from portfolio.portfolio import Portfolio
from reporting.render import render_history, render_holdings, render_market, render_performance
from reporting.summary import (
    HISTORY_COLUMNS,
    HOLDINGS_COLUMNS,
    export_history_csv,
    history_frame,
    holdings_frame,
    market_frame,
    portfolio_summary,
)

T0 = datetime(2026, 1, 2, 9, 30, 0)


def make_market() -> StockMarket:
    return StockMarket.from_listings([
        Stock("AAPL", "Apple Inc.", "175.00"),
        Stock("MSFT", "Microsoft Corp.", "420.00"),
    ])


def traded_portfolio() -> Portfolio:
    p = Portfolio(10000)
    buy(p, make_market(), "AAPL", 10, T0)
    return p


class TestFrames:
    def test_market_frame(self):
        df = market_frame(make_market())
        assert list(df["symbol"]) == ["AAPL", "MSFT"]
        assert df.loc[1, "price"] == Decimal("420.00")

    def test_empty_frames_keep_columns(self):
        p = Portfolio(100)
        assert list(holdings_frame(p, make_market()).columns) == HOLDINGS_COLUMNS
        assert list(history_frame(p).columns) == HISTORY_COLUMNS
        assert history_frame(p).empty

    def test_holdings_frame_values(self):
        df = holdings_frame(traded_portfolio(), make_market())
        row = df.iloc[0]
        assert row["symbol"] == "AAPL"
        assert row["quantity"] == 10
        assert row["value"] == Decimal("1750.00")

    def test_history_frame(self):
        df = history_frame(traded_portfolio())
        assert len(df) == 1
        assert df.loc[0, "side"] == "BUY"
        assert df.loc[0, "timestamp"] == "2026-01-02 09:30:00"
        assert df.loc[0, "total"] == Decimal("1750.00")

    def test_portfolio_summary(self):
        s = portfolio_summary(traded_portfolio(), make_market())
        assert s["cash_balance"] == Decimal("8250.00")
        assert s["total_value"] == Decimal("10000.00")
        assert s["holdings"] == {"AAPL": 10}
        assert s["transactions"] == 1
        assert s["gain_percent"] == 0


class TestExport:
    def test_export_history_csv(self, tmp_path):
        path = tmp_path / "history.csv"
        rows = export_history_csv(traded_portfolio(), path)
        assert rows == 1
        df = pd.read_csv(path)
        assert list(df.columns) == HISTORY_COLUMNS
        assert df.loc[0, "symbol"] == "AAPL"
        assert df.loc[0, "quantity"] == 10

    def test_export_empty_history_writes_header(self, tmp_path):
        path = tmp_path / "empty.csv"
        assert export_history_csv(Portfolio(1), path) == 0
        assert path.read_text().strip() == ",".join(HISTORY_COLUMNS)


class TestRender:
    """Tests for the text sections."""

    def test_render_market(self):
        lines = render_market(make_market())
        assert "--- Current Market Data ---" in lines
        assert "AAPL  Apple Inc.      $175.00" in lines

    def test_render_holdings_empty(self):
        lines = render_holdings(Portfolio(100), make_market())
        assert "You currently hold no stocks." in lines
        assert "Cash Balance: $100.00" in lines

    def test_render_holdings(self):
        text = "\n".join(render_holdings(traded_portfolio(), make_market()))
        assert "AAPL" in text
        assert "$1,750.00" in text
        assert "Cash Balance: $8,250.00" in text

    def test_render_market_lists_every_frame_row(self):
        m = make_market()
        lines = render_market(m)
        assert len([l for l in lines if l.startswith(("AAPL", "MSFT"))]) == len(market_frame(m))

    def test_render_holdings_skips_unlisted_symbols(self):
        p = traded_portfolio()
        p.add_holding("GONE", 3)
        text = "\n".join(render_holdings(p, make_market()))
        assert "AAPL" in text
        assert "GONE" not in text

    def test_render_history_empty(self):
        assert "No transactions recorded yet." in render_history(Portfolio(1))

    def test_render_history(self):
        text = "\n".join(render_history(traded_portfolio()))
        assert "2026-01-02 09:30:00" in text
        assert "BUY" in text
        assert "$1,750.00" in text

    def test_render_performance(self):
        p = Portfolio(1000)
        p.add_holding("MSFT", 1)
        lines = render_performance(p, make_market())
        assert "Initial Investment: $1,000.00" in lines
        assert "Current Portfolio Value: $1,420.00" in lines
        assert "Gain/Loss: $420.00" in lines
        assert "Percentage Gain/Loss: 42.00%" in lines
