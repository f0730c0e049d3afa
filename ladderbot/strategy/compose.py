"""
Two-sided composite strategy.

Puts a buy-side and a sell-side strategy behind the single four-phase
contract the bot drives. Intents are always ordered sell side first, then
buy side.
"""

import logging

from ..types import Balances, RestingOrder, OperationIntent
from .base import Strategy

logger = logging.getLogger(__name__)


class ComposeStrategy(Strategy):
    """
    Composite over one buy-side and one sell-side strategy.

    Phase semantics:
        pre_update:            sell then buy, stops at the first error
        prune_existing_offers: sell then buy, intents concatenated
        update_with_ops:       sell then buy, intents concatenated
        post_update:           both sides always run; the first error is
                               re-raised once both have been attempted
    """

    def __init__(self, buy_strategy: Strategy, sell_strategy: Strategy):
        self._buy = buy_strategy
        self._sell = sell_strategy

    @property
    def buy_strategy(self) -> Strategy:
        return self._buy

    @property
    def sell_strategy(self) -> Strategy:
        return self._sell

    def pre_update(self, balances: Balances) -> None:
        self._sell.pre_update(balances)
        self._buy.pre_update(balances)

    def prune_existing_offers(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> tuple[list[OperationIntent], list[RestingOrder], list[RestingOrder]]:
        sell_ops, buy_orders, sell_orders = self._sell.prune_existing_offers(buy_orders, sell_orders)
        buy_ops, buy_orders, sell_orders = self._buy.prune_existing_offers(buy_orders, sell_orders)
        return sell_ops + buy_ops, buy_orders, sell_orders

    def update_with_ops(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> list[OperationIntent]:
        sell_ops = self._sell.update_with_ops(buy_orders, sell_orders)
        buy_ops = self._buy.update_with_ops(buy_orders, sell_orders)
        return sell_ops + buy_ops

    def post_update(self) -> None:
        errors: list[Exception] = []
        for name, strategy in (("sell", self._sell), ("buy", self._buy)):
            try:
                strategy.post_update()
            except Exception as e:
                logger.warning(f"{name} side post_update failed: {e}")
                errors.append(e)
        if errors:
            raise errors[0]
