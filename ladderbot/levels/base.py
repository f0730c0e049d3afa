"""
Level provider interface.
"""

from abc import ABC, abstractmethod

from ..types import Level


class LevelProvider(ABC):
    """
    Turns balances into an ordered list of target levels.

    Providers are pure: no state between calls and no I/O. Index 0 of the
    result is the innermost (best) level.
    """

    @abstractmethod
    def get_levels(self, max_asset_base: float, max_asset_quote: float) -> list[Level]:
        """
        Compute target levels for one side of the book.

        The caller decides the frame: the sell side passes (base, quote),
        the buy side passes the two assets swapped.

        Raises:
            BalanceError: If the balances cannot produce a quote
        """
        pass
