"""
Ledger collaborators: readers and submitters.
"""

from .base import LedgerReader, OperationSubmitter
from .horizon import HorizonClient
from .paper import PaperLedger
from .dry_run import DryRunSubmitter

__all__ = [
    "LedgerReader",
    "OperationSubmitter",
    "HorizonClient",
    "PaperLedger",
    "DryRunSubmitter",
]
