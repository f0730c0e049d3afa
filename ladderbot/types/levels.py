"""
Level type.

A level is one target quote point produced by a level provider.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Level:
    """
    Target quote point.

    Attributes:
        target_price: Quote units per base unit, in the frame the provider
                      was called in
        target_amount: Base units, in the same frame
    """
    target_price: float
    target_amount: float
