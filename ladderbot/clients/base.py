"""
Ledger collaborator interfaces.

The bot reads account state through a LedgerReader and hands operation
batches to an OperationSubmitter. Transport, signing and fees live behind
these interfaces.
"""

from abc import ABC, abstractmethod

from ..types import Balances, RestingOrder, OperationIntent


class LedgerReader(ABC):
    """Read-only view of the trading account."""

    @abstractmethod
    def load_balances(self, account: str) -> Balances:
        """
        Load spendable and trusted amounts for the traded pair.

        Raises:
            LedgerError: On transport failure or unknown account
        """
        pass

    @abstractmethod
    def load_own_orders(self, account: str) -> tuple[list[RestingOrder], list[RestingOrder]]:
        """
        Load the account's offers on the traded pair.

        Returns:
            (buy orders, sell orders) in the canonical frame. Ordering is not
            guaranteed; the bot re-sorts before diffing.

        Raises:
            LedgerError: On transport failure or unknown account
        """
        pass


class OperationSubmitter(ABC):
    """Applies a batch of operations all-or-nothing."""

    @abstractmethod
    def submit(self, ops: list[OperationIntent]) -> None:
        """
        Submit a batch.

        Raises:
            SubmissionError: If the batch was rejected (nothing applied)
        """
        pass
