"""
ladderbot - autonomous two-sided market maker for a DEX order book.

Keeps one quote ladder on each side of an asset pair, sized and priced
from the account's own balances, and converges the live book toward it
with as few create/cancel operations as tolerances allow.
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    LadderBotError,
    ConfigError,
    BalanceError,
    LedgerError,
    SubmissionError,
)

# Core types
from .types import (
    Side,
    OperationAction,
    Asset,
    Level,
    Balances,
    MAX_NATIVE_TRUST,
    RestingOrder,
    OperationIntent,
    sort_best_first,
)

# Level providers
from .levels import LevelProvider, AutonomousLevelProvider

# Strategy
from .strategy import (
    Strategy,
    SideStrategy,
    ComposeStrategy,
    AutonomousConfig,
    make_autonomous_strategy,
)

# Ledger collaborators
from .clients import (
    LedgerReader,
    OperationSubmitter,
    HorizonClient,
    PaperLedger,
    DryRunSubmitter,
)

# Control loop
from .bot import Bot, TickPhase, TickResult

# Application
from .config import AppConfig
from .app import BotApplication

__all__ = [
    # Version
    "__version__",
    # Errors
    "LadderBotError",
    "ConfigError",
    "BalanceError",
    "LedgerError",
    "SubmissionError",
    # Types
    "Side",
    "OperationAction",
    "Asset",
    "Level",
    "Balances",
    "MAX_NATIVE_TRUST",
    "RestingOrder",
    "OperationIntent",
    "sort_best_first",
    # Level providers
    "LevelProvider",
    "AutonomousLevelProvider",
    # Strategy
    "Strategy",
    "SideStrategy",
    "ComposeStrategy",
    "AutonomousConfig",
    "make_autonomous_strategy",
    # Clients
    "LedgerReader",
    "OperationSubmitter",
    "HorizonClient",
    "PaperLedger",
    "DryRunSubmitter",
    # Control loop
    "Bot",
    "TickPhase",
    "TickResult",
    # Application
    "AppConfig",
    "BotApplication",
]
