"""
Resting order types.

Orders are kept in one canonical frame for both sides of the book:
price is quote-per-base and amount is in base units. The ledger itself
stores a buy as an offer selling quote for base, priced in base-per-quote;
`selling_amount` and `selling_price` give that view back.
"""

from dataclasses import dataclass

from .core import Side


@dataclass(frozen=True, slots=True)
class RestingOrder:
    """A live order owned by the bot."""
    order_id: str
    side: Side
    price: float   # Quote per base
    amount: float  # Base units

    @property
    def selling_amount(self) -> float:
        """Amount of the asset this offer sells (base for SELL, quote for BUY)."""
        if self.side is Side.SELL:
            return self.amount
        return self.amount * self.price

    @property
    def selling_price(self) -> float:
        """Offer price as stored on the ledger (buying units per selling unit)."""
        if self.side is Side.SELL:
            return self.price
        return 1.0 / self.price

    @property
    def buying_amount(self) -> float:
        """Amount of the asset this offer would receive if fully taken."""
        if self.side is Side.SELL:
            return self.amount * self.price
        return self.amount

    @classmethod
    def from_offer(
        cls,
        order_id: str,
        side: Side,
        selling_amount: float,
        selling_price: float,
    ) -> "RestingOrder":
        """
        Build from a ledger offer expressed in its own selling frame.

        Raises:
            ValueError: If the offer price is not positive
        """
        if selling_price <= 0:
            raise ValueError(f"offer {order_id} has non-positive price {selling_price}")
        if side is Side.SELL:
            return cls(order_id=order_id, side=side, price=selling_price, amount=selling_amount)
        return cls(
            order_id=order_id,
            side=side,
            price=1.0 / selling_price,
            amount=selling_amount * selling_price,
        )


def sort_best_first(orders: list[RestingOrder], side: Side) -> list[RestingOrder]:
    """
    Sort orders innermost first.

    Sells: lowest ask first. Buys: highest bid first.
    """
    return sorted(orders, key=lambda o: o.price, reverse=side is Side.BUY)
