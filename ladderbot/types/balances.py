"""
Account balance snapshot.
"""

import math
from dataclasses import dataclass

from ..errors import BalanceError

# Native asset has no trust line; treat its limit as effectively unbounded
MAX_NATIVE_TRUST: float = 100_000_000_000.0


@dataclass(frozen=True, slots=True)
class Balances:
    """
    Spendable and trusted amounts for the two assets of the pair.

    Refreshed every tick from the ledger. `trust >= max` is expected but
    not enforced here.
    """
    max_base: float
    max_quote: float
    trust_base: float
    trust_quote: float

    def validate(self) -> None:
        """
        Check the snapshot is usable.

        Raises:
            BalanceError: If any value is negative, NaN or infinite
        """
        for name in ("max_base", "max_quote", "trust_base", "trust_quote"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise BalanceError(f"{name} is not finite: {value}")
            if value < 0:
                raise BalanceError(f"{name} is negative: {value}")

    @property
    def base_headroom(self) -> float:
        """How much more base the account can receive under its trust line."""
        return self.trust_base - self.max_base

    @property
    def quote_headroom(self) -> float:
        """How much more quote the account can receive under its trust line."""
        return self.trust_quote - self.max_quote
