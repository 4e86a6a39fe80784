"""Tests for configuration loading and the CLI commands."""
from __future__ import annotations

import sys
from decimal import Decimal

import pytest

from cli.main import build_market, build_user, load_config, main
from common.config_loader import load_all, load_yaml
from common.errors import ConfigError

MARKET_YAML = """
stocks:
  nvda: {name: NVIDIA Corp., price: "900.50"}
  AAPL: {name: Apple Inc., price: 175}
"""


def write(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return str(p)


class TestConfig:
    def test_load_yaml_empty_file(self, tmp_path):
        assert load_yaml(write(tmp_path, "e.yaml", "")) == {}

    def test_load_yaml_rejects_non_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(write(tmp_path, "l.yaml", "- a\n- b\n"))

    def test_load_yaml_rejects_bad_syntax(self, tmp_path):
        with pytest.raises(ConfigError):
            load_yaml(write(tmp_path, "b.yaml", "stocks: {AAPL: [\n"))

    def test_load_all_shipped_config(self):
        cfg = load_all()
        assert cfg.session["username"] == "Trader123"
        assert "AAPL" in cfg.market["stocks"]

    def test_missing_files_mean_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "nope.yaml"), str(tmp_path / "nada.yaml"))
        assert cfg.session == {} and cfg.market == {}
        assert len(build_market(cfg.market)) == 5
        assert build_user(cfg.session).portfolio.cash_balance == Decimal("10000.00")


class TestBuilders:
    def test_build_market_from_yaml(self, tmp_path):
        market = build_market(load_yaml(write(tmp_path, "m.yaml", MARKET_YAML)))
        assert [s.symbol for s in market.list_all()] == ["NVDA", "AAPL"]
        assert market.lookup("nvda").price == Decimal("900.50")

    def test_build_market_missing_price(self):
        with pytest.raises(ConfigError, match="price"):
            build_market({"stocks": {"AAPL": {"name": "Apple"}}})

    def test_build_market_negative_price(self):
        with pytest.raises(ConfigError):
            build_market({"stocks": {"AAPL": {"name": "Apple", "price": -1}}})

    def test_build_user_overrides(self):
        u = build_user({"username": "cfg", "initial_cash": "5"}, username="cli", cash="7.5")
        assert u.username == "cli"
        assert u.portfolio.initial_investment == Decimal("7.5")


class TestCommands:
    """End-to-end CLI invocations."""

    def run_cli(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["cli.main", *argv])
        with pytest.raises(SystemExit) as exc:
            main()
        return exc.value.code

    def test_help(self, monkeypatch, capsys):
        assert self.run_cli(monkeypatch, "--help") == 0
        out = capsys.readouterr().out
        assert "run" in out and "market" in out and "trade" in out

    def test_market_command(self, monkeypatch, capsys):
        assert self.run_cli(monkeypatch, "market") == 0
        assert "MSFT  Microsoft Corp. $420.00" in capsys.readouterr().out

    def test_trade_buy(self, monkeypatch, capsys):
        code = self.run_cli(monkeypatch, "trade", "--side", "buy", "--symbol", "aapl", "--quantity", "10")
        out = capsys.readouterr().out
        assert code == 0
        assert "Successfully bought 10 shares of AAPL for $1,750.00." in out
        assert "Current Portfolio Value: $10,000.00" in out

    def test_trade_rejected_exit_code(self, monkeypatch, capsys):
        code = self.run_cli(monkeypatch, "trade", "--side", "sell", "--symbol", "AAPL", "--quantity", "1")
        out = capsys.readouterr().out
        assert code == 1
        assert out.startswith("Error: You only have 0 shares of AAPL")
        assert "(insufficient_holdings)" in out
        assert "Portfolio Performance" not in out

    def test_bad_market_config(self, monkeypatch, capsys, tmp_path):
        bad = write(tmp_path, "m.yaml", "stocks: {AAPL: {name: Apple}}\n")
        assert self.run_cli(monkeypatch, "market", "--market", bad) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_cash_override(self, monkeypatch, capsys):
        code = self.run_cli(monkeypatch, "trade", "--cash", "100", "--side", "buy", "--symbol", "AAPL", "--quantity", "1")
        assert code == 1
        assert "You need $175.00 but have $100.00." in capsys.readouterr().out

    def test_logging_configured_once_with_cli_level(self, monkeypatch, capsys):
        import cli.main as cli_main

        calls = []
        monkeypatch.setattr(cli_main, "configure_logging", lambda **kw: calls.append(kw))

        assert self.run_cli(monkeypatch, "market", "--log-level", "DEBUG") == 0
        assert len(calls) == 1
        assert calls[0]["level"] == "DEBUG"
