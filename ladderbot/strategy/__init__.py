"""
Strategy module for the market maker.

Public API:
    Strategy: Four-phase lifecycle base class
    SideStrategy: Reconciler for one side of the book
    ComposeStrategy: Buy side + sell side behind one lifecycle
    AutonomousConfig / make_autonomous_strategy: Balance-driven two-sided ladder

Quick Start:
    from ladderbot.strategy import AutonomousConfig, make_autonomous_strategy

    strategy = make_autonomous_strategy(AutonomousConfig(spread=0.02))
    strategy.pre_update(balances)
    cancels, buys, sells = strategy.prune_existing_offers(buys, sells)
    ops = strategy.update_with_ops(buys, sells)
    strategy.post_update()
"""

from .base import Strategy
from .side import SideStrategy, within_tolerance, PENDING_ORDER_ID
from .compose import ComposeStrategy
from .autonomous import AutonomousConfig, make_autonomous_strategy

__all__ = [
    "Strategy",
    "SideStrategy",
    "within_tolerance",
    "PENDING_ORDER_ID",
    "ComposeStrategy",
    "AutonomousConfig",
    "make_autonomous_strategy",
]
