"""
Strategy base class.

Every strategy, whether it covers one side of the book or composes two
sides, implements the same four-phase lifecycle driven once per tick by
the bot:

    pre_update(balances)
    prune_existing_offers(buy_orders, sell_orders)
    update_with_ops(buy_orders, sell_orders)
    post_update()

Phases raise on failure. The bot treats any exception from any phase as a
reason to tear down all of its orders.
"""

from abc import ABC, abstractmethod

from ..types import Balances, RestingOrder, OperationIntent


class Strategy(ABC):
    """
    Abstract base class for order book strategies.

    Strategies never talk to the ledger. They look at balances and at the
    bot's resting orders and return OperationIntents; the bot submits them.

    Example:
        class NoopStrategy(Strategy):
            def pre_update(self, balances):
                pass

            def prune_existing_offers(self, buy_orders, sell_orders):
                return [], buy_orders, sell_orders

            def update_with_ops(self, buy_orders, sell_orders):
                return []

            def post_update(self):
                pass
    """

    @abstractmethod
    def pre_update(self, balances: Balances) -> None:
        """
        Store the balance snapshot used by this tick.

        Raises:
            BalanceError: If the balances are inconsistent
        """
        pass

    @abstractmethod
    def prune_existing_offers(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> tuple[list[OperationIntent], list[RestingOrder], list[RestingOrder]]:
        """
        Cancel orders that no longer match a target level.

        Returns:
            (cancel intents, surviving buy orders, surviving sell orders)
        """
        pass

    @abstractmethod
    def update_with_ops(
        self,
        buy_orders: list[RestingOrder],
        sell_orders: list[RestingOrder],
    ) -> list[OperationIntent]:
        """
        Compute the operations that bring the surviving orders to target.

        Returns:
            Intents in submission order
        """
        pass

    @abstractmethod
    def post_update(self) -> None:
        """Bookkeeping hook, called only after the tick's ops were submitted."""
        pass
