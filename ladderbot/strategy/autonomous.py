"""
Autonomous two-sided strategy factory.

Wires two AutonomousLevelProviders into a buy and a sell SideStrategy
and composes them.
"""

from dataclasses import dataclass

from ..levels import AutonomousLevelProvider
from ..types import Side
from .compose import ComposeStrategy
from .side import SideStrategy


@dataclass(slots=True)
class AutonomousConfig:
    """
    Parameters of the autonomous strategy.

    Tolerances:
        price_tolerance: Relative price deviation left alone (0.001 = 0.1%)
        amount_tolerance: Relative amount deviation left alone

    Curve:
        spread: Full spread; each side adds half of it to its center price
        plateau_threshold_percentage: Asset share (0-1) at which the center
                                      price stops moving
        amount_spread: Haircut on every level amount, strictly inside (0, 1)

    Ladder:
        max_levels: Levels quoted per side
    """
    price_tolerance: float = 0.001
    amount_tolerance: float = 0.001
    spread: float = 0.02
    max_levels: int = 1
    plateau_threshold_percentage: float = 0.9
    amount_spread: float = 0.05


def make_autonomous_strategy(config: AutonomousConfig) -> ComposeStrategy:
    """
    Build the two-sided autonomous strategy.

    Raises:
        ConfigError: If any parameter is out of range
    """
    sell_side = SideStrategy(
        side=Side.SELL,
        level_provider=AutonomousLevelProvider(
            spread=config.spread,
            plateau_threshold=config.plateau_threshold_percentage,
            use_max_quote_in_target_amount_calc=False,
            amount_spread=config.amount_spread,
        ),
        price_tolerance=config.price_tolerance,
        amount_tolerance=config.amount_tolerance,
        max_levels=config.max_levels,
    )
    # buy side asks with base/quote switched and sizes from its "quote" (our base)
    buy_side = SideStrategy(
        side=Side.BUY,
        level_provider=AutonomousLevelProvider(
            spread=config.spread,
            plateau_threshold=config.plateau_threshold_percentage,
            use_max_quote_in_target_amount_calc=True,
            amount_spread=config.amount_spread,
        ),
        price_tolerance=config.price_tolerance,
        amount_tolerance=config.amount_tolerance,
        max_levels=config.max_levels,
    )
    return ComposeStrategy(buy_strategy=buy_side, sell_strategy=sell_side)
