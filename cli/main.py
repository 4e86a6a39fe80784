"""Stock trading simulator CLI.

Provides commands for:
- run: Interactive trading session
- market: Print the market listing
- trade: Execute a single buy or sell and print the result
"""
from __future__ import annotations

import argparse
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from accounts.user import User
from cli.session import Session
from common.config_loader import LoadedConfig, load_yaml
from common.errors import ConfigError, TradingError
from common.log_config import configure_logging, get_logger
from engine.trade_engine import buy, sell
from market.stock import Stock
from market.stock_market import StockMarket
from reporting.render import render_market, render_performance

log = get_logger(__name__)

DEFAULT_USERNAME = "Trader123"
DEFAULT_CASH = Decimal("10000.00")


def build_market(raw: Dict[str, Any]) -> StockMarket:
    """Build the market from the `stocks` section of the market config."""
    entries = raw.get("stocks")
    if not entries:
        return StockMarket.default()
    if not isinstance(entries, dict):
        raise ConfigError("market config: 'stocks' must map symbol -> {name, price}")

    listings: List[Stock] = []
    for symbol, info in entries.items():
        if not isinstance(info, dict) or "price" not in info:
            raise ConfigError(f"market config: {symbol} needs a price")
        try:
            listings.append(Stock(str(symbol), str(info.get("name", symbol)), str(info["price"])))
        except ValueError as e:
            raise ConfigError(f"market config: {e}") from e
    try:
        return StockMarket.from_listings(listings)
    except ValueError as e:
        raise ConfigError(f"market config: {e}") from e


def build_user(raw: Dict[str, Any], username: Optional[str] = None, cash: Optional[str] = None) -> User:
    """Build the session user; explicit arguments override the session config."""
    name = username or raw.get("username") or DEFAULT_USERNAME
    initial = cash if cash is not None else raw.get("initial_cash", DEFAULT_CASH)
    try:
        return User.open(str(name), str(initial))
    except ValueError as e:
        raise ConfigError(f"session config: {e}") from e


def load_config(session_path: str, market_path: str) -> LoadedConfig:
    """Load both config files; a missing file means defaults."""
    parts = {}
    for key, path in (("session", session_path), ("market", market_path)):
        try:
            parts[key] = load_yaml(path)
        except FileNotFoundError:
            parts[key] = {}
    return LoadedConfig(**parts)


def setup(args) -> tuple[User, StockMarket]:
    cfg = load_config(args.session, args.market)
    logging_cfg = cfg.session.get("logging") or {}
    configure_logging(
        level=args.log_level or logging_cfg.get("level", "WARNING"),
        format_json=bool(logging_cfg.get("json", False)),
    )
    log.debug(
        "config_loaded",
        session_path=args.session,
        market_path=args.market,
        listed=len(cfg.market.get("stocks") or {}),
    )
    return build_user(cfg.session, args.user, args.cash), build_market(cfg.market)


def cmd_run(args) -> int:
    """Handle run command: interactive session."""
    try:
        user, market = setup(args)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    Session(user, market).run()
    return 0


def cmd_market(args) -> int:
    """Handle market command: print listing."""
    try:
        _, market = setup(args)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    for line in render_market(market):
        print(line)
    return 0


def cmd_trade(args) -> int:
    """Handle trade command: one buy or sell against a fresh portfolio."""
    try:
        user, market = setup(args)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    execute = buy if args.side == "buy" else sell
    result = execute(user.portfolio, market, args.symbol, args.quantity, datetime.now())
    try:
        result.outcome.raise_for_error()
    except TradingError as e:
        print(f"Error: {e} ({e.kind.value})")
        return 1
    print(result.message)
    for line in render_performance(user.portfolio, market):
        print(line)
    return 0


def main():
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Stock trading simulator: static market, single portfolio",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--session", default="config/session.yaml", help="Session config file")
    common.add_argument("--market", default="config/market.yaml", help="Market listing file")
    common.add_argument("--user", default=None, help="Override username")
    common.add_argument("--cash", default=None, help="Override starting cash")
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (logs go to stderr)",
    )

    run_p = sub.add_parser("run", parents=[common], help="Interactive trading session")
    run_p.set_defaults(func=cmd_run)

    mkt = sub.add_parser("market", parents=[common], help="Show market data")
    mkt.set_defaults(func=cmd_market)

    tr = sub.add_parser("trade", parents=[common], help="Execute a single trade")
    tr.add_argument("--side", choices=["buy", "sell"], required=True, help="Trade direction")
    tr.add_argument("--symbol", required=True, help="Stock symbol (e.g., AAPL)")
    tr.add_argument("--quantity", type=int, required=True, help="Number of shares")
    tr.set_defaults(func=cmd_trade)

    args = p.parse_args()
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
