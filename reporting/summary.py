from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from market.stock_market import StockMarket
from portfolio.portfolio import Portfolio

MARKET_COLUMNS = ["symbol", "name", "price"]
HOLDINGS_COLUMNS = ["symbol", "name", "quantity", "price", "value"]
HISTORY_COLUMNS = ["timestamp", "side", "symbol", "name", "quantity", "price", "total"]

def market_frame(market: StockMarket) -> pd.DataFrame:
    rows = [{"symbol": s.symbol, "name": s.name, "price": s.price} for s in market.list_all()]
    return pd.DataFrame(rows, columns=MARKET_COLUMNS)

def holdings_frame(portfolio: Portfolio, market: StockMarket) -> pd.DataFrame:
    rows = [p.__dict__ for p in portfolio.positions(market)]
    return pd.DataFrame(rows, columns=HOLDINGS_COLUMNS)

def history_frame(portfolio: Portfolio) -> pd.DataFrame:
    rows = [t.to_record() for t in portfolio.transaction_history]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)

def portfolio_summary(portfolio: Portfolio, market: StockMarket) -> Dict[str, Any]:
    perf = portfolio.performance(market)
    return {
        "cash_balance": portfolio.cash_balance,
        "total_value": perf.current,
        "holdings": portfolio.holdings,
        "transactions": len(portfolio.transaction_history),
        "initial_investment": perf.initial_investment,
        "gain": perf.gain,
        "gain_percent": perf.gain_percent,
    }

def export_history_csv(portfolio: Portfolio, path: str | Path) -> int:
    """Write the transaction log as CSV and return the number of rows written."""
    df = history_frame(portfolio)
    df.to_csv(Path(path), index=False)
    return len(df)
