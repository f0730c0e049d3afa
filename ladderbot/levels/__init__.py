"""
Level providers: balances in, target quote levels out.
"""

from .base import LevelProvider
from .autonomous import AutonomousLevelProvider

__all__ = [
    "LevelProvider",
    "AutonomousLevelProvider",
]
