"""
Autonomous level provider.

Prices and sizes come only from the balances held in the account: the
center price is the ratio of the two balances, flattened once either asset
makes up more than `plateau_threshold` of the total so that the quote
saturates instead of running off to infinity as one asset is depleted.

This provider assumes it owns both balances outright. Sharing a balance
with another strategy would need trade tracking on top of balance tracking.
"""

import logging

from ..errors import BalanceError, ConfigError
from ..types import Level
from .base import LevelProvider

logger = logging.getLogger(__name__)


class AutonomousLevelProvider(LevelProvider):
    """
    Single-level provider driven by account balances.

    Sizing rule:
        amount = 2 * balance * spread / (4 + spread) * (1 - amount_spread)

    The closed form keeps a fill at the quoted price from draining the
    balance even under repeated fills; `amount_spread` takes a further cut
    off the top, which acts as the effective spread when several levels
    are consumed.

    Example:
        provider = AutonomousLevelProvider(spread=0.02, plateau_threshold=0.9)
        provider.get_levels(1000.0, 500.0)
        # [Level(target_price=0.505, target_amount=9.45...)]
    """

    def __init__(
        self,
        spread: float,
        plateau_threshold: float,
        use_max_quote_in_target_amount_calc: bool = False,
        amount_spread: float = 0.05,
    ):
        """
        Args:
            spread: Full spread as a fraction (0.02 = 2%); half of it is added
                    to the center price
            plateau_threshold: Share of total value (0-1 exclusive) at which
                               the center price stops moving
            use_max_quote_in_target_amount_calc: Size from the quote balance
                                                 instead of the base balance
            amount_spread: Safety haircut on the amount, strictly inside (0, 1)

        Raises:
            ConfigError: On any out-of-range parameter
        """
        if amount_spread >= 1.0 or amount_spread <= 0.0:
            raise ConfigError(f"amount_spread needs to be between 0 and 1 (exclusive): {amount_spread}")
        if spread <= 0.0:
            raise ConfigError(f"spread must be positive: {spread}")
        if plateau_threshold >= 1.0 or plateau_threshold <= 0.0:
            raise ConfigError(f"plateau_threshold needs to be between 0 and 1 (exclusive): {plateau_threshold}")

        self.spread = spread
        self.plateau_threshold = plateau_threshold
        self.use_max_quote_in_target_amount_calc = use_max_quote_in_target_amount_calc
        self.amount_spread = amount_spread

    def center_price(self, max_asset_base: float, max_asset_quote: float) -> float:
        """
        Unspread center price with plateau clamping.

        Raises:
            BalanceError: If both balances are zero
        """
        total = max_asset_quote + max_asset_base
        if total <= 0:
            raise BalanceError("cannot price an empty account (both balances are zero)")

        threshold = self.plateau_threshold
        if max_asset_quote / total >= threshold:
            return threshold / (1 - threshold)
        if max_asset_base / total >= threshold:
            return (1 - threshold) / threshold
        # a threshold below 1 means base > 0 here
        return max_asset_quote / max_asset_base

    def get_levels(self, max_asset_base: float, max_asset_quote: float) -> list[Level]:
        center = self.center_price(max_asset_base, max_asset_quote)

        # price always adds the spread
        target_price = center * (1 + self.spread / 2)

        sizing_balance = max_asset_quote if self.use_max_quote_in_target_amount_calc else max_asset_base
        target_amount = (2 * sizing_balance * self.spread) / (4 + self.spread)
        target_amount *= (1 - self.amount_spread)

        logger.debug(
            f"levels: base={max_asset_base:.7f} quote={max_asset_quote:.7f} "
            f"center={center:.7f} price={target_price:.7f} amount={target_amount:.7f}"
        )
        return [Level(target_price=target_price, target_amount=target_amount)]
