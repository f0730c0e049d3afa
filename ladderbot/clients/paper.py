"""
In-memory paper ledger.

Implements both collaborator interfaces so the bot can run end to end
without a network. Offers are stored in the canonical frame and get
sequential ids. Batches are validated in full before any operation is
applied, which gives the same all-or-nothing behaviour as a ledger
transaction. Fills are not simulated; use set_balances() to move money.
"""

import logging

from ..errors import LedgerError, SubmissionError
from ..types import (
    Balances,
    MAX_NATIVE_TRUST,
    OperationIntent,
    RestingOrder,
    Side,
    sort_best_first,
)
from .base import LedgerReader, OperationSubmitter

logger = logging.getLogger(__name__)


class PaperLedger(LedgerReader, OperationSubmitter):
    """
    Paper account holding two balances and a set of offers.

    Example:
        ledger = PaperLedger(max_base=1000.0, max_quote=500.0)
        bot = Bot(reader=ledger, submitter=ledger, strategy=strategy, account="paper")
        bot.update()
    """

    def __init__(
        self,
        max_base: float,
        max_quote: float,
        trust_base: float = MAX_NATIVE_TRUST,
        trust_quote: float = MAX_NATIVE_TRUST,
        account: str = "paper",
    ):
        self._account = account
        self._balances = Balances(
            max_base=max_base,
            max_quote=max_quote,
            trust_base=trust_base,
            trust_quote=trust_quote,
        )
        self._offers: dict[str, RestingOrder] = {}
        self._next_id = 1

        self.batches: list[list[OperationIntent]] = []

    def set_balances(self, balances: Balances) -> None:
        self._balances = balances

    @property
    def offers(self) -> list[RestingOrder]:
        return list(self._offers.values())

    def load_balances(self, account: str) -> Balances:
        self._check_account(account)
        return self._balances

    def load_own_orders(self, account: str) -> tuple[list[RestingOrder], list[RestingOrder]]:
        self._check_account(account)
        buys = [o for o in self._offers.values() if o.side is Side.BUY]
        sells = [o for o in self._offers.values() if o.side is Side.SELL]
        return sort_best_first(buys, Side.BUY), sort_best_first(sells, Side.SELL)

    def submit(self, ops: list[OperationIntent]) -> None:
        self._validate(ops)

        offers = dict(self._offers)
        next_id = self._next_id
        for op in ops:
            if op.is_cancel:
                del offers[op.order_id]
            else:
                order_id = str(next_id)
                next_id += 1
                offers[order_id] = RestingOrder(
                    order_id=order_id,
                    side=op.side,
                    price=op.price,
                    amount=op.amount,
                )

        self._offers = offers
        self._next_id = next_id
        self.batches.append(list(ops))
        logger.info(f"[PAPER] applied batch of {len(ops)} op(s), {len(offers)} offer(s) resting")

    def _validate(self, ops: list[OperationIntent]) -> None:
        cancelled: set[str] = set()
        for op in ops:
            if op.is_cancel:
                if op.order_id not in self._offers or op.order_id in cancelled:
                    raise SubmissionError(f"cancel of unknown offer {op.order_id}")
                cancelled.add(op.order_id)
            elif op.price <= 0 or op.amount <= 0:
                raise SubmissionError(f"invalid create {op.describe()}")

    def _check_account(self, account: str) -> None:
        if account != self._account:
            raise LedgerError(f"account not found: {account}")
