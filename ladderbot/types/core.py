"""
Core enums - the fundamental vocabulary of the market maker.
"""

from enum import Enum, auto


class Side(Enum):
    """Side of the quote ladder, from the base asset's point of view."""
    BUY = auto()
    SELL = auto()

    @property
    def opposite(self) -> "Side":
        return Side.SELL if self is Side.BUY else Side.BUY


class OperationAction(Enum):
    """Operation kinds emitted by strategies."""
    CREATE = auto()
    CANCEL = auto()
