"""
Dry-run submitter.

Logs every batch instead of sending it. Used when the bot reads a real
account but must not trade.
"""

import logging

from ..types import OperationIntent
from .base import OperationSubmitter

logger = logging.getLogger(__name__)


class DryRunSubmitter(OperationSubmitter):
    """Records and logs batches; never fails."""

    def __init__(self):
        self.batches: list[list[OperationIntent]] = []

    def submit(self, ops: list[OperationIntent]) -> None:
        self.batches.append(list(ops))
        logger.info(f"[DRY RUN] batch of {len(ops)} op(s)")
        for op in ops:
            logger.info(f"[DRY RUN]   {op.describe()}")

    @property
    def ops_submitted(self) -> int:
        return sum(len(batch) for batch in self.batches)
