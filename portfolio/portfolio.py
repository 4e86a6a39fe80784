"""Cash, holdings and transaction log for a single trader.

All mutators return an ``Outcome``. A failed outcome means nothing changed:
there are no partial debits, no partial share removals, and the log only grows
after the matching ledger change has gone through.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from common.errors import ErrorKind, Outcome
from common.log_config import get_logger
from common.money import Number, format_money, to_decimal
from market.stock_market import StockMarket
from portfolio.holdings import Holdings
from portfolio.transaction import Transaction

log = get_logger(__name__)


@dataclass(frozen=True)
class Performance:
    """Gain or loss relative to the starting cash."""

    initial_investment: Decimal
    current: Decimal
    gain: Decimal
    gain_percent: Decimal


@dataclass(frozen=True)
class PositionValue:
    """A holding priced at the current market price."""

    symbol: str
    name: str
    quantity: int
    price: Decimal
    value: Decimal


def _is_positive_int(quantity: object) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0


class Portfolio:
    def __init__(self, initial_cash: Number):
        cash = to_decimal(initial_cash)
        if cash < 0:
            raise ValueError(f"Initial cash must be >= 0, got {cash}")
        self._cash = cash
        self._initial_investment = cash
        self._holdings = Holdings()
        self._history: List[Transaction] = []

    @property
    def cash_balance(self) -> Decimal:
        return self._cash

    @property
    def initial_investment(self) -> Decimal:
        return self._initial_investment

    @property
    def holdings(self) -> Dict[str, int]:
        return self._holdings.snapshot()

    @property
    def transaction_history(self) -> Tuple[Transaction, ...]:
        return tuple(self._history)

    def add_cash(self, amount: Number) -> Outcome:
        amt = to_decimal(amount)
        if amt <= 0:
            log.info("cash_rejected", op="add", amount=str(amt), error=ErrorKind.INVALID_AMOUNT.value)
            return Outcome.failure(ErrorKind.INVALID_AMOUNT, "Amount to add must be positive.")
        self._cash += amt
        log.debug("cash_added", amount=str(amt), cash_balance=str(self._cash))
        return Outcome.success(
            f"Added {format_money(amt)} to cash balance. New balance: {format_money(self._cash)}"
        )

    def deduct_cash(self, amount: Number) -> Outcome:
        amt = to_decimal(amount)
        if amt <= 0:
            log.info("cash_rejected", op="deduct", amount=str(amt), error=ErrorKind.INVALID_AMOUNT.value)
            return Outcome.failure(ErrorKind.INVALID_AMOUNT, "Amount to deduct must be positive.")
        if amt > self._cash:
            log.info("cash_rejected", op="deduct", amount=str(amt), error=ErrorKind.INSUFFICIENT_FUNDS.value)
            return Outcome.failure(
                ErrorKind.INSUFFICIENT_FUNDS,
                f"Insufficient funds. You need {format_money(amt)} but have {format_money(self._cash)}.",
            )
        self._cash -= amt
        log.debug("cash_deducted", amount=str(amt), cash_balance=str(self._cash))
        return Outcome.success()

    def add_holding(self, symbol: str, quantity: int) -> Outcome:
        # Pure ledger update; funds are the caller's responsibility.
        if not _is_positive_int(quantity):
            return Outcome.failure(ErrorKind.INVALID_QUANTITY, "Quantity must be positive.")
        new_qty = self._holdings.adjust(symbol, quantity)
        log.debug(
            "holding_added", symbol=symbol.upper(), quantity=quantity, held=new_qty, cash_balance=str(self._cash)
        )
        return Outcome.success()

    def remove_holding(self, symbol: str, quantity: int) -> Outcome:
        if not _is_positive_int(quantity):
            return Outcome.failure(ErrorKind.INVALID_QUANTITY, "Quantity must be positive.")
        held = self._holdings.quantity(symbol)
        if held < quantity:
            log.info("holding_rejected", symbol=symbol.upper(), quantity=quantity, held=held)
            return Outcome.failure(
                ErrorKind.INSUFFICIENT_HOLDINGS,
                f"You only have {held} shares of {symbol.upper()}. Cannot sell {quantity} shares.",
            )
        new_qty = self._holdings.adjust(symbol, -quantity)
        log.debug(
            "holding_removed", symbol=symbol.upper(), quantity=quantity, held=new_qty, cash_balance=str(self._cash)
        )
        return Outcome.success()

    def record_transaction(self, transaction: Transaction) -> None:
        self._history.append(transaction)

    def holding_quantity(self, symbol: str) -> int:
        return self._holdings.quantity(symbol)

    def positions(self, market: StockMarket) -> List[PositionValue]:
        """Holdings priced at market; symbols the market no longer lists are skipped."""
        rows = []
        for symbol, qty in self._holdings.items():
            stock = market.lookup(symbol)
            if stock is None:
                continue
            rows.append(PositionValue(symbol, stock.name, qty, stock.price, stock.price * qty))
        return rows

    def total_value(self, market: StockMarket) -> Decimal:
        return self._cash + sum((p.value for p in self.positions(market)), Decimal("0"))

    def performance(self, market: StockMarket) -> Performance:
        current = self.total_value(market)
        gain = current - self._initial_investment
        if self._initial_investment == 0:
            pct = Decimal("0")
        else:
            pct = gain / self._initial_investment * 100
        return Performance(
            initial_investment=self._initial_investment,
            current=current,
            gain=gain,
            gain_percent=pct,
        )

    def __repr__(self) -> str:
        return (
            f"Portfolio(cash={self._cash}, holdings={self._holdings.snapshot()}, "
            f"transactions={len(self._history)})"
        )
