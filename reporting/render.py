"""Text sections shown by the interactive session.

Each renderer returns a list of lines; printing is left to the caller. Tables
come from the frames in reporting.summary.
"""
from __future__ import annotations

from typing import List

from common.money import format_money, round_cents
from market.stock_market import StockMarket
from portfolio.portfolio import Portfolio
from reporting.summary import history_frame, holdings_frame, market_frame, portfolio_summary

RULE = "-" * 55


def render_market(market: StockMarket) -> List[str]:
    lines = ["", "--- Current Market Data ---", f"{'Symbol':<6} {'Company Name':<15} {'Price':<10}", "-" * 32]
    for row in market_frame(market).to_dict("records"):
        lines.append(f"{row['symbol']:<5} {row['name']:<15} ${row['price']:.2f}")
    lines.append("-" * 32)
    return lines


def render_holdings(portfolio: Portfolio, market: StockMarket) -> List[str]:
    lines = ["", "--- Your Holdings ---"]
    if not portfolio.holdings:
        lines.append("You currently hold no stocks.")
    else:
        lines.append(f"{'Symbol':<6} {'Name':<15} {'Quantity':<10} {'Price':<10} {'Value':<10}")
        lines.append(RULE)
        for row in holdings_frame(portfolio, market).to_dict("records"):
            lines.append(
                f"{row['symbol']:<6} {row['name']:<15} {row['quantity']:<10} "
                f"{format_money(row['price']):<10} {format_money(row['value']):<10}"
            )
    lines.append(f"Cash Balance: {format_money(portfolio.cash_balance)}")
    lines.append(RULE)
    return lines


def render_history(portfolio: Portfolio) -> List[str]:
    lines = ["", "--- Transaction History ---"]
    if not portfolio.transaction_history:
        lines.append("No transactions recorded yet.")
    else:
        df = history_frame(portfolio)
        for col in ("price", "total"):
            df[col] = df[col].map(format_money)
        lines.extend(df.to_string(index=False).splitlines())
    lines.append("-" * 27)
    return lines


def render_performance(portfolio: Portfolio, market: StockMarket) -> List[str]:
    summary = portfolio_summary(portfolio, market)
    return [
        "",
        "--- Portfolio Performance ---",
        f"Initial Investment: {format_money(summary['initial_investment'])}",
        f"Current Portfolio Value: {format_money(summary['total_value'])}",
        f"Gain/Loss: {format_money(summary['gain'])}",
        f"Percentage Gain/Loss: {round_cents(summary['gain_percent']):.2f}%",
        "-" * 29,
    ]
