"""Tests for configuration and application wiring."""

import os
import pytest
from unittest.mock import patch

from ladderbot.app import BotApplication, PAPER_ACCOUNT
from ladderbot.bot import Bot
from ladderbot.clients import DryRunSubmitter, HorizonClient
from ladderbot.config import AppConfig
from ladderbot.errors import ConfigError
from ladderbot.strategy import AutonomousConfig

ISSUER = "GBISSUERXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX"


class TestAppConfig:
    """Tests for AppConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = AppConfig()

        assert config.ledger_mode == "paper"
        assert config.tick_interval_seconds == 5
        assert config.price_tolerance == 0.001
        assert config.spread == 0.02
        assert config.max_levels == 1
        assert config.plateau_threshold_percentage == 0.9
        assert config.amount_spread == 0.05

    def test_from_env(self):
        """Test loading from environment variables."""
        with patch.dict(os.environ, {
            "LEDGER_MODE": "HORIZON",
            "TRADING_ACCOUNT": "GACCOUNT",
            "ASSET_QUOTE": f"USD:{ISSUER}",
            "SPREAD": "0.04",
            "MAX_LEVELS": "3",
            "TICK_INTERVAL_SECONDS": "10",
        }, clear=True):
            config = AppConfig.from_env()

            assert config.ledger_mode == "horizon"
            assert config.trading_account == "GACCOUNT"
            assert config.asset_base == "native"
            assert config.asset_quote == f"USD:{ISSUER}"
            assert config.spread == 0.04
            assert config.max_levels == 3
            assert config.tick_interval_seconds == 10

    def test_from_env_file(self, tmp_path):
        """Test .env values load and real environment wins."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "\n"
            "SPREAD=0.06\n"
            "AMOUNT_SPREAD='0.1'\n"
            "MAX_LEVELS=2\n"
        )

        with patch.dict(os.environ, {"MAX_LEVELS": "4"}, clear=True):
            config = AppConfig.from_env_file(str(env_file))

            assert config.spread == 0.06
            assert config.amount_spread == 0.1
            assert config.max_levels == 4

    def test_from_env_file_missing(self):
        """Test a missing file falls back to environment only."""
        with patch.dict(os.environ, {}, clear=True):
            config = AppConfig.from_env_file("/nonexistent/.env")

            assert config == AppConfig()

    def test_validate_success(self):
        """Test validation succeeds with default paper config."""
        assert AppConfig().validate() == []

    def test_validate_horizon_requirements(self):
        """Test horizon mode needs an account and a valid, distinct pair."""
        config = AppConfig(ledger_mode="horizon", asset_quote="USD")
        errors = config.validate()

        assert any("TRADING_ACCOUNT" in e for e in errors)
        assert any("ASSET_QUOTE" in e for e in errors)

        same = AppConfig(ledger_mode="horizon", trading_account="G", asset_base="XLM", asset_quote="native")
        assert any("must differ" in e for e in same.validate())

    def test_validate_ranges(self):
        """Test every out-of-range strategy parameter is reported."""
        config = AppConfig(
            ledger_mode="live",
            tick_interval_seconds=0,
            price_tolerance=-0.1,
            amount_tolerance=-0.1,
            spread=0.0,
            max_levels=0,
            plateau_threshold_percentage=1.0,
            amount_spread=1.0,
            paper_base_balance=-1.0,
        )
        errors = config.validate()

        for name in (
            "LEDGER_MODE",
            "TICK_INTERVAL_SECONDS",
            "PRICE_TOLERANCE",
            "AMOUNT_TOLERANCE",
            "SPREAD",
            "MAX_LEVELS",
            "PLATEAU_THRESHOLD_PERCENTAGE",
            "AMOUNT_SPREAD",
        ):
            assert any(e.startswith(name) for e in errors), name

    def test_validate_paper_balances(self):
        errors = AppConfig(paper_quote_balance=-5.0).validate()
        assert any("PAPER_QUOTE_BALANCE" in e for e in errors)

    def test_strategy_config(self):
        """Test strategy parameters are mapped field by field."""
        config = AppConfig(spread=0.03, max_levels=2, amount_spread=0.1, plateau_threshold_percentage=0.8)

        assert config.strategy_config() == AutonomousConfig(
            price_tolerance=0.001,
            amount_tolerance=0.001,
            spread=0.03,
            max_levels=2,
            plateau_threshold_percentage=0.8,
            amount_spread=0.1,
        )


class TestBotApplication:
    """Tests for BotApplication wiring."""

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigError, match="SPREAD"):
            BotApplication(AppConfig(spread=-1.0))

    def test_paper_mode_ticks(self):
        """Test paper wiring quotes both sides on the first tick."""
        app = BotApplication(AppConfig(paper_base_balance=1000.0, paper_quote_balance=500.0))

        assert isinstance(app.bot, Bot)
        result = app.bot.update()

        assert result.success is True
        assert result.ops_submitted == 2
        assert app.bot.update().ops_submitted == 0

    def test_stop_cancels_offers(self):
        """Test shutdown tears the book down."""
        app = BotApplication(AppConfig())
        app.bot.update()

        app.stop()

        assert app.bot.stats["teardowns"] == 1
        assert app._reader.offers == []

    def test_horizon_mode_uses_dry_run(self):
        """Test horizon mode reads the account and never trades."""
        config = AppConfig(
            ledger_mode="horizon",
            trading_account="GACCOUNT",
            asset_quote=f"USD:{ISSUER}",
        )

        app = BotApplication(config)

        assert isinstance(app._reader, HorizonClient)
        assert isinstance(app._submitter, DryRunSubmitter)
        app._reader.close()

    def test_paper_account(self):
        app = BotApplication(AppConfig())
        assert app._reader.load_balances(PAPER_ACCOUNT).max_base == 1000.0
