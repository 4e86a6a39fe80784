"""Interactive menu session.

The session owns no global state: user, market, input, output and clock are
all passed in, which is what lets tests script a full session.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional

from accounts.user import User
from common.errors import ErrorKind
from common.log_config import get_logger
from common.money import format_money
from engine.trade_engine import TradeResult, buy, sell
from market.stock_market import StockMarket
from reporting.render import render_history, render_holdings, render_market, render_performance
from reporting.summary import export_history_csv

log = get_logger(__name__)

MENU = [
    "1. View Market Data",
    "2. Buy Stock",
    "3. Sell Stock",
    "4. View Portfolio Holdings",
    "5. View Transaction History",
    "6. View Portfolio Performance",
    "7. Export Transaction History",
    "0. Exit",
]


class Session:
    """Reads menu commands and applies them to one user's portfolio."""

    def __init__(
        self,
        user: User,
        market: StockMarket,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.user = user
        self.market = market
        self._input = input_fn
        self._out = output
        self._clock = clock
        self._actions: Dict[int, Callable[[], None]] = {
            1: self.show_market,
            2: self.buy_stock,
            3: self.sell_stock,
            4: self.show_holdings,
            5: self.show_history,
            6: self.show_performance,
            7: self.export_history,
        }

    def _emit(self, lines) -> None:
        for line in lines:
            self._out(line)

    def _read_int(self, prompt: str) -> Optional[int]:
        raw = self._input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            return None

    def show_menu(self) -> None:
        self._emit([
            "",
            "--- Stock Trading Platform ---",
            f"Welcome, {self.user.username}!",
            f"Current Cash Balance: {format_money(self.user.portfolio.cash_balance)}",
            *MENU,
        ])

    def show_market(self) -> None:
        self._emit(render_market(self.market))

    def show_holdings(self) -> None:
        self._emit(render_holdings(self.user.portfolio, self.market))

    def show_history(self) -> None:
        self._emit(render_history(self.user.portfolio))

    def show_performance(self) -> None:
        self._emit(render_performance(self.user.portfolio, self.market))

    def _trade(self, verb: str, execute: Callable[..., TradeResult]) -> Optional[TradeResult]:
        symbol = self._input(f"Enter stock symbol to {verb} (e.g., AAPL): ").strip().upper()
        if self.market.lookup(symbol) is None:
            self._out("Stock not found. Please enter a valid symbol.")
            return None
        quantity = self._read_int(f"Enter quantity to {verb}: ")
        if quantity is None:
            log.info("input_rejected", field="quantity", error=ErrorKind.MALFORMED_INPUT.value)
            self._out("Invalid quantity. Please enter a number.")
            return None
        result = execute(self.user.portfolio, self.market, symbol, quantity, self._clock())
        self._out(result.message)
        return result

    def buy_stock(self) -> Optional[TradeResult]:
        return self._trade("buy", buy)

    def sell_stock(self) -> Optional[TradeResult]:
        return self._trade("sell", sell)

    def export_history(self) -> None:
        path = self._input("Enter file path for CSV export: ").strip()
        if not path:
            self._out("No file path given.")
            return
        try:
            rows = export_history_csv(self.user.portfolio, path)
        except OSError as e:
            log.warning("export_failed", path=path, error=str(e))
            self._out(f"Could not write {path}: {e}")
            return
        self._out(f"Exported {rows} transactions to {path}.")

    def execute_choice(self, choice: int) -> None:
        if choice == 0:
            self._out("Exiting Stock Trading Platform. Happy Trading!")
            return
        action = self._actions.get(choice)
        if action is None:
            self._out("Invalid choice. Please try again.")
            return
        action()

    def run(self) -> int:
        """Run the menu loop until Exit or end of input.

        Returns:
            Number of commands read, including the final Exit.
        """
        commands = 0
        while True:
            self.show_menu()
            try:
                raw = self._input("Enter your choice: ").strip()
            except EOFError:
                self._out("")
                self.execute_choice(0)
                return commands
            commands += 1
            try:
                choice = int(raw)
            except ValueError:
                self._out("Invalid input. Please enter a number corresponding to the menu option.")
                continue
            try:
                self.execute_choice(choice)
            except EOFError:
                self._out("")
                self.execute_choice(0)
                return commands
            if choice == 0:
                return commands
