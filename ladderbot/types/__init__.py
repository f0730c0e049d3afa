"""
Market maker types.

Example:
    from ladderbot.types import Side, Level, RestingOrder, OperationIntent
"""

# Core enums
from .core import (
    Side,
    OperationAction,
)

# Assets
from .assets import (
    Asset,
    NATIVE_CODE,
)

# Levels
from .levels import Level

# Balances
from .balances import (
    Balances,
    MAX_NATIVE_TRUST,
)

# Orders
from .orders import (
    RestingOrder,
    sort_best_first,
)

# Operations
from .operations import OperationIntent

__all__ = [
    # Enums
    "Side",
    "OperationAction",
    # Assets
    "Asset",
    "NATIVE_CODE",
    # Levels
    "Level",
    # Balances
    "Balances",
    "MAX_NATIVE_TRUST",
    # Orders
    "RestingOrder",
    "sort_best_first",
    # Operations
    "OperationIntent",
]
