"""Buy and sell execution against a portfolio and a market.

The order of steps is fixed so a rejected trade is a complete no-op:

- Buy: resolve stock, validate quantity, debit cost, then add shares and log.
- Sell: resolve stock, validate quantity, check shares held, remove shares,
  then credit revenue and log.

The timestamp of each trade is supplied by the caller. The transaction record is
built before any ledger change, so a bad timestamp raises ValueError with the
portfolio untouched.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from common.errors import ErrorKind, Outcome
from common.log_config import get_logger
from common.money import format_money
from market.stock import Stock
from market.stock_market import StockMarket, normalize_symbol
from portfolio.portfolio import Portfolio
from portfolio.transaction import Side, Transaction

log = get_logger(__name__)


@dataclass(frozen=True)
class TradeResult:
    """Outcome of a buy or sell, with the logged transaction on success."""

    outcome: Outcome
    transaction: Optional[Transaction] = None

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def message(self) -> str:
        return self.outcome.message


def _reject(side: Side, symbol: str, quantity: object, outcome: Outcome) -> TradeResult:
    log.info(
        "trade_rejected",
        side=side.value,
        symbol=symbol,
        quantity=quantity,
        error=outcome.error.value if outcome.error else None,
    )
    return TradeResult(outcome=outcome)


def _resolve(
    market: StockMarket, symbol: str, quantity: object
) -> Tuple[Optional[Stock], Optional[Outcome]]:
    stock = market.lookup(symbol)
    if stock is None:
        return None, Outcome.failure(
            ErrorKind.STOCK_NOT_FOUND, "Stock not found. Please enter a valid symbol."
        )
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        return stock, Outcome.failure(ErrorKind.INVALID_QUANTITY, "Quantity must be positive.")
    return stock, None


def buy(
    portfolio: Portfolio,
    market: StockMarket,
    symbol: str,
    quantity: int,
    at: datetime,
) -> TradeResult:
    """Buy shares at the current market price.

    Args:
        portfolio: Portfolio to debit and credit with shares.
        market: Market used to resolve the symbol and price.
        symbol: Ticker, case-insensitive.
        quantity: Number of shares, must be a positive integer.
        at: Execution time recorded on the transaction.

    Returns:
        TradeResult; on failure the portfolio is unchanged.
    """
    symbol = normalize_symbol(symbol)
    stock, failure = _resolve(market, symbol, quantity)
    if failure is not None:
        return _reject(Side.BUY, symbol, quantity, failure)

    txn = Transaction(stock=stock, quantity=quantity, price=stock.price, side=Side.BUY, timestamp=at)
    cost = stock.price * quantity
    if cost > 0:
        debit = portfolio.deduct_cash(cost)
        if not debit:
            return _reject(Side.BUY, symbol, quantity, debit)

    portfolio.add_holding(stock.symbol, quantity)
    portfolio.record_transaction(txn)

    log.info("trade_executed", side="BUY", symbol=stock.symbol, quantity=quantity, price=str(stock.price))
    return TradeResult(
        outcome=Outcome.success(
            f"Successfully bought {quantity} shares of {stock.symbol} for {format_money(cost)}."
        ),
        transaction=txn,
    )


def sell(
    portfolio: Portfolio,
    market: StockMarket,
    symbol: str,
    quantity: int,
    at: datetime,
) -> TradeResult:
    """Sell shares at the current market price.

    Shares are removed before any cash is credited; if the removal is refused
    no revenue is booked.
    """
    symbol = normalize_symbol(symbol)
    stock, failure = _resolve(market, symbol, quantity)
    if failure is not None:
        return _reject(Side.SELL, symbol, quantity, failure)

    held = portfolio.holding_quantity(stock.symbol)
    if held < quantity:
        return _reject(
            Side.SELL,
            symbol,
            quantity,
            Outcome.failure(
                ErrorKind.INSUFFICIENT_HOLDINGS,
                f"You only have {held} shares of {stock.symbol}. Cannot sell {quantity} shares.",
            ),
        )

    txn = Transaction(stock=stock, quantity=quantity, price=stock.price, side=Side.SELL, timestamp=at)
    removed = portfolio.remove_holding(stock.symbol, quantity)
    if not removed:
        return _reject(Side.SELL, symbol, quantity, removed)

    revenue = stock.price * quantity
    if revenue > 0:
        portfolio.add_cash(revenue)
    portfolio.record_transaction(txn)

    log.info("trade_executed", side="SELL", symbol=stock.symbol, quantity=quantity, price=str(stock.price))
    return TradeResult(
        outcome=Outcome.success(
            f"Successfully sold {quantity} shares of {stock.symbol} for {format_money(revenue)}."
        ),
        transaction=txn,
    )
