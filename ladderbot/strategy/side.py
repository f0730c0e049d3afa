"""
Single-side reconciler.

Owns the resting orders for one direction of the ladder and decides each
tick which of them to keep, which to cancel and which levels still need a
new order.

KEY DESIGN PRINCIPLES:

1. TOLERANCE-GATED MATCHING
   - An order matches a level when both its price and its amount are within
     the configured relative tolerance of the level (boundary inclusive)
   - Matching orders are left alone; every cancel/create costs a ledger
     operation and a fee

2. GREEDY, LEVEL-PRIORITY MATCHING
   - Levels are walked innermost first; each takes the first unclaimed order
     within tolerance
   - A claimed order leaves the candidate pool, so ties go to the level with
     the lower index, never to the more recent order

3. ONE FRAME FOR BOTH SIDES
   - The buy side asks the level provider with base and quote swapped, then
     maps the level back: price = 1 / provider price, amount unchanged
   - Orders and intents are always quote-per-base and base units

4. CAPACITY-BOUNDED LEVELS
   - Level amounts are capped by the spendable balance of the asset being
     sold and by the trust headroom of the asset being bought, consumed from
     the innermost level outwards

5. FULL-REPLACE STATE
   - update_with_ops stages the new resting set; post_update commits it.
     A tick that fails before post_update leaves the previous set in place.
"""

import logging
import math
from typing import Optional

from ..errors import BalanceError, ConfigError
from ..levels import LevelProvider
from ..types import Balances, Level, OperationIntent, RestingOrder, Side
from .base import Strategy

logger = logging.getLogger(__name__)

# Placeholder id for orders planned this tick but not yet on the ledger
PENDING_ORDER_ID = ""


def within_tolerance(actual: float, target: float, tolerance: float) -> bool:
    """
    Check |actual - target| / target <= tolerance.

    The boundary is inclusive; float noise right at the boundary counts as
    inside.
    """
    if target == 0:
        return actual == 0
    diff = abs(actual - target) / abs(target)
    return diff <= tolerance or math.isclose(diff, tolerance, rel_tol=1e-9, abs_tol=1e-12)


class SideStrategy(Strategy):
    """
    Reconciler for one side of the book.

    Example:
        sell = SideStrategy(
            side=Side.SELL,
            level_provider=AutonomousLevelProvider(spread=0.02, plateau_threshold=0.9),
            price_tolerance=0.001,
            amount_tolerance=0.001,
        )
        sell.pre_update(balances)
        cancels, buys, sells = sell.prune_existing_offers(buys, sells)
        creates = sell.update_with_ops(buys, sells)
        # ... submit ...
        sell.post_update()
    """

    def __init__(
        self,
        side: Side,
        level_provider: LevelProvider,
        price_tolerance: float,
        amount_tolerance: float,
        max_levels: int = 1,
    ):
        """
        Args:
            side: Which side of the ladder this instance owns
            level_provider: Source of target levels
            price_tolerance: Max relative price deviation kept as-is
            amount_tolerance: Max relative amount deviation kept as-is
            max_levels: Upper bound on levels quoted per side

        Raises:
            ConfigError: On negative tolerances or max_levels < 1
        """
        if price_tolerance < 0:
            raise ConfigError(f"price_tolerance must be non-negative: {price_tolerance}")
        if amount_tolerance < 0:
            raise ConfigError(f"amount_tolerance must be non-negative: {amount_tolerance}")
        if max_levels < 1:
            raise ConfigError(f"max_levels must be at least 1: {max_levels}")

        self._side = side
        self._provider = level_provider
        self._price_tolerance = price_tolerance
        self._amount_tolerance = amount_tolerance
        self._max_levels = max_levels

        self._balances: Optional[Balances] = None
        self._levels: list[Level] = []
        self._resting: list[RestingOrder] = []
        self._staged: Optional[list[RestingOrder]] = None

    @property
    def side(self) -> Side:
        return self._side

    @property
    def current_levels(self) -> list[Level]:
        """Target levels computed by the last pre_update (canonical frame)."""
        return list(self._levels)

    @property
    def resting_orders(self) -> list[RestingOrder]:
        """Resting set committed by the last successful tick."""
        return list(self._resting)

    def pre_update(self, balances: Balances) -> None:
        balances.validate()
        self._balances = balances
        self._staged = None
        self._levels = self._compute_levels()
        logger.debug(f"[{self._side.name}] {len(self._levels)} target level(s): {self._levels}")

    def prune_existing_offers(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> tuple[list[OperationIntent], list[RestingOrder], list[RestingOrder]]:
        pairs, unmatched = self._match(self._levels, self._own(buy_orders, sell_orders))
        cancels = [OperationIntent.cancel(order) for order in unmatched]
        kept = [order for _, order in pairs if order is not None]

        if cancels:
            logger.info(f"[{self._side.name}] pruning {len(cancels)} offer(s), keeping {len(kept)}")

        if self._side is Side.BUY:
            return cancels, kept, list(sell_orders)
        return cancels, list(buy_orders), kept

    def update_with_ops(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> list[OperationIntent]:
        levels = self._compute_levels()
        pairs, unmatched = self._match(levels, self._own(buy_orders, sell_orders))

        # Leftovers are only possible if prune did not run this tick
        ops = [OperationIntent.cancel(order) for order in unmatched]
        staged: list[RestingOrder] = []

        for level, order in pairs:
            if order is not None:
                staged.append(order)
                continue
            ops.append(OperationIntent.create(self._side, level.target_price, level.target_amount))
            staged.append(RestingOrder(
                order_id=PENDING_ORDER_ID,
                side=self._side,
                price=level.target_price,
                amount=level.target_amount,
            ))

        self._staged = staged
        if ops:
            logger.info(f"[{self._side.name}] {len(ops)} op(s): " + ", ".join(op.describe() for op in ops))
        else:
            logger.debug(f"[{self._side.name}] book already at target")
        return ops

    def post_update(self) -> None:
        if self._staged is None:
            return
        self._resting = self._staged
        self._staged = None

    def _own(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> list[RestingOrder]:
        return list(buy_orders) if self._side is Side.BUY else list(sell_orders)

    def _compute_levels(self) -> list[Level]:
        """Provider levels mapped to the canonical frame, truncated and capped."""
        if self._balances is None:
            raise BalanceError("no balance snapshot; pre_update has not run")
        b = self._balances

        if self._side is Side.SELL:
            levels = self._provider.get_levels(b.max_base, b.max_quote)
        else:
            # switch sides of base/quote for the buy side
            raw = self._provider.get_levels(b.max_quote, b.max_base)
            levels = [Level(target_price=1.0 / lvl.target_price, target_amount=lvl.target_amount) for lvl in raw]

        return self._cap_to_capacity(levels[:self._max_levels])

    def _cap_to_capacity(self, levels: list[Level]) -> list[Level]:
        """Shrink or drop levels that would oversell a balance or overflow a trust line."""
        b = self._balances
        if self._side is Side.SELL:
            selling_cap, buying_cap = b.max_base, b.quote_headroom
        else:
            selling_cap, buying_cap = b.max_quote, b.base_headroom

        capped: list[Level] = []
        for level in levels:
            price = level.target_price
            if self._side is Side.SELL:
                limit = min(selling_cap, buying_cap / price)
            else:
                limit = min(selling_cap / price, buying_cap)

            amount = level.target_amount
            if amount > limit:
                logger.info(
                    f"[{self._side.name}] capping level {amount:.7f}@{price:.7f} "
                    f"to capacity {max(0.0, limit):.7f}"
                )
                amount = max(0.0, limit)
                level = Level(target_price=price, target_amount=amount)

            if amount <= 0:
                logger.warning(f"[{self._side.name}] no capacity left for level at {price:.7f}, skipping")
                continue

            capped.append(level)
            if self._side is Side.SELL:
                selling_cap -= amount
                buying_cap -= amount * price
            else:
                selling_cap -= amount * price
                buying_cap -= amount
        return capped

    def _match(
        self,
        levels: list[Level],
        orders: list[RestingOrder],
    ) -> tuple[list[tuple[Level, Optional[RestingOrder]]], list[RestingOrder]]:
        """
        Pair each level with the first unclaimed order within tolerance.

        Returns:
            ([(level, matched order or None)], unmatched orders)
        """
        pool = list(orders)
        pairs: list[tuple[Level, Optional[RestingOrder]]] = []
        for level in levels:
            match_idx = None
            for idx, order in enumerate(pool):
                if self._matches(order, level):
                    match_idx = idx
                    break
            pairs.append((level, pool.pop(match_idx) if match_idx is not None else None))
        return pairs, pool

    def _matches(self, order: RestingOrder, level: Level) -> bool:
        return (
            within_tolerance(order.price, level.target_price, self._price_tolerance)
            and within_tolerance(order.amount, level.target_amount, self._amount_tolerance)
        )
