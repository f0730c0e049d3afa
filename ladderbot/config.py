"""
Application configuration.

Loads settings from environment variables with sensible defaults. Values
are read once at startup and only flow into constructors.
"""

import os
from dataclasses import dataclass

from .strategy import AutonomousConfig
from .types import Asset

LEDGER_MODES = ("paper", "horizon")


@dataclass
class AppConfig:
    """Application configuration."""

    # Ledger
    ledger_mode: str = "paper"
    horizon_url: str = "https://horizon-testnet.stellar.org"
    trading_account: str = ""
    asset_base: str = "native"
    asset_quote: str = ""

    # Paper ledger starting balances
    paper_base_balance: float = 1000.0
    paper_quote_balance: float = 500.0

    # Loop
    tick_interval_seconds: int = 5

    # Strategy
    price_tolerance: float = 0.001
    amount_tolerance: float = 0.001
    spread: float = 0.02
    max_levels: int = 1
    plateau_threshold_percentage: float = 0.9
    amount_spread: float = 0.05

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            # Ledger
            ledger_mode=os.getenv("LEDGER_MODE", "paper").lower(),
            horizon_url=os.getenv("HORIZON_URL", "https://horizon-testnet.stellar.org"),
            trading_account=os.getenv("TRADING_ACCOUNT", ""),
            asset_base=os.getenv("ASSET_BASE", "native"),
            asset_quote=os.getenv("ASSET_QUOTE", ""),

            # Paper
            paper_base_balance=float(os.getenv("PAPER_BASE_BALANCE", "1000")),
            paper_quote_balance=float(os.getenv("PAPER_QUOTE_BALANCE", "500")),

            # Loop
            tick_interval_seconds=int(os.getenv("TICK_INTERVAL_SECONDS", "5")),

            # Strategy
            price_tolerance=float(os.getenv("PRICE_TOLERANCE", "0.001")),
            amount_tolerance=float(os.getenv("AMOUNT_TOLERANCE", "0.001")),
            spread=float(os.getenv("SPREAD", "0.02")),
            max_levels=int(os.getenv("MAX_LEVELS", "1")),
            plateau_threshold_percentage=float(os.getenv("PLATEAU_THRESHOLD_PERCENTAGE", "0.9")),
            amount_spread=float(os.getenv("AMOUNT_SPREAD", "0.05")),

            # Logging
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_env_file(cls, path: str) -> "AppConfig":
        """
        Load config from .env file, then environment variables.

        Environment variables override file values.
        """
        if os.path.exists(path):
            with open(path) as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        key, value = line.split("=", 1)
                        key = key.strip()
                        value = value.strip().strip("'\"")
                        # Only set if not already in environment
                        if key not in os.environ:
                            os.environ[key] = value

        return cls.from_env()

    def strategy_config(self) -> AutonomousConfig:
        return AutonomousConfig(
            price_tolerance=self.price_tolerance,
            amount_tolerance=self.amount_tolerance,
            spread=self.spread,
            max_levels=self.max_levels,
            plateau_threshold_percentage=self.plateau_threshold_percentage,
            amount_spread=self.amount_spread,
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.ledger_mode not in LEDGER_MODES:
            errors.append(f"LEDGER_MODE must be one of {', '.join(LEDGER_MODES)}")

        if self.ledger_mode == "horizon":
            if not self.trading_account:
                errors.append("TRADING_ACCOUNT is required in horizon mode")

            parsed = []
            for name, value in (("ASSET_BASE", self.asset_base), ("ASSET_QUOTE", self.asset_quote)):
                try:
                    parsed.append(Asset.parse(value))
                except ValueError as e:
                    errors.append(f"{name} is invalid: {e}")

            if len(parsed) == 2 and parsed[0] == parsed[1]:
                errors.append("ASSET_BASE and ASSET_QUOTE must differ")

        if self.tick_interval_seconds < 1:
            errors.append("TICK_INTERVAL_SECONDS must be at least 1")

        if self.price_tolerance < 0:
            errors.append("PRICE_TOLERANCE must be non-negative")

        if self.amount_tolerance < 0:
            errors.append("AMOUNT_TOLERANCE must be non-negative")

        if self.spread <= 0:
            errors.append("SPREAD must be positive")

        if self.max_levels < 1:
            errors.append("MAX_LEVELS must be at least 1")

        if not 0 < self.plateau_threshold_percentage < 1:
            errors.append("PLATEAU_THRESHOLD_PERCENTAGE must be between 0 and 1 (exclusive)")

        if not 0 < self.amount_spread < 1:
            errors.append("AMOUNT_SPREAD must be between 0 and 1 (exclusive)")

        if self.ledger_mode == "paper" and (self.paper_base_balance < 0 or self.paper_quote_balance < 0):
            errors.append("PAPER_BASE_BALANCE and PAPER_QUOTE_BALANCE must be non-negative")

        return errors
