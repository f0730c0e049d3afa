"""
Operation intents.

Strategies never touch the ledger; they describe what should happen and
the submitter turns a batch of intents into one ledger transaction.
"""

from dataclasses import dataclass
from typing import Optional

from .core import Side, OperationAction
from .orders import RestingOrder


@dataclass(frozen=True, slots=True)
class OperationIntent:
    """
    Either "cancel order X" or "create order (side, price, amount)".

    Price and amount use the canonical frame (quote per base, base units).
    """
    action: OperationAction
    side: Side
    price: float
    amount: float
    order_id: Optional[str] = None  # Set for cancels

    @classmethod
    def create(cls, side: Side, price: float, amount: float) -> "OperationIntent":
        return cls(action=OperationAction.CREATE, side=side, price=price, amount=amount)

    @classmethod
    def cancel(cls, order: RestingOrder) -> "OperationIntent":
        return cls(
            action=OperationAction.CANCEL,
            side=order.side,
            price=order.price,
            amount=order.amount,
            order_id=order.order_id,
        )

    @property
    def is_create(self) -> bool:
        return self.action is OperationAction.CREATE

    @property
    def is_cancel(self) -> bool:
        return self.action is OperationAction.CANCEL

    def describe(self) -> str:
        """Short human-readable form for logs."""
        if self.is_cancel:
            return f"CANCEL {self.side.name} {self.order_id} ({self.amount:.7f}@{self.price:.7f})"
        return f"CREATE {self.side.name} {self.amount:.7f}@{self.price:.7f}"
