"""
Bot control loop.

One tick walks a fixed sequence of phases:

    LOAD_BALANCES -> LOAD_ORDERS -> PRE_UPDATE -> PRUNE -> COMPUTE_UPDATES
        -> SUBMIT -> POST_UPDATE

and then the loop sleeps for the tick interval. Prune cancellations are
submitted as their own batch before any creates are computed, so excess
levels come off the book before new ones go on.

FAIL-SAFE: an exception in any phase, submission included, triggers one
teardown that cancels every offer the bot owns on both sides. A failed
teardown is logged and the loop carries on with the next tick.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .clients import LedgerReader, OperationSubmitter
from .errors import ConfigError
from .strategy import Strategy
from .types import OperationIntent, RestingOrder, Side, sort_best_first

logger = logging.getLogger(__name__)


class TickPhase(Enum):
    """Phases of one tick, in execution order."""
    LOAD_BALANCES = auto()
    LOAD_ORDERS = auto()
    PRE_UPDATE = auto()
    PRUNE = auto()
    COMPUTE_UPDATES = auto()
    SUBMIT = auto()
    POST_UPDATE = auto()


@dataclass
class TickResult:
    """Outcome of a single tick."""
    success: bool
    failed_phase: Optional[TickPhase] = None
    error: Optional[str] = None
    ops_submitted: int = 0
    teardown_attempted: bool = False
    teardown_ok: bool = True


class Bot:
    """
    Market making bot bound to one account and one strategy.

    Example:
        ledger = PaperLedger(max_base=1000.0, max_quote=500.0)
        bot = Bot(
            reader=ledger,
            submitter=ledger,
            strategy=make_autonomous_strategy(AutonomousConfig()),
            account="paper",
            tick_interval_seconds=5,
        )
        bot.run()
    """

    def __init__(
        self,
        reader: LedgerReader,
        submitter: OperationSubmitter,
        strategy: Strategy,
        account: str,
        tick_interval_seconds: float = 5,
    ):
        """
        Args:
            reader: Source of balances and own offers
            submitter: Applies operation batches
            strategy: Strategy driven through its four phases every tick
            account: Trading account id
            tick_interval_seconds: Sleep between ticks

        Raises:
            ConfigError: If the tick interval is not positive
        """
        if tick_interval_seconds <= 0:
            raise ConfigError(f"tick_interval_seconds must be positive: {tick_interval_seconds}")

        self._reader = reader
        self._submitter = submitter
        self._strategy = strategy
        self._account = account
        self._tick_interval = tick_interval_seconds

        # Last snapshot of own offers, replaced wholesale every tick
        self._buy_orders: list[RestingOrder] = []
        self._sell_orders: list[RestingOrder] = []

        self._stop_event = threading.Event()

        # Stats
        self._ticks = 0
        self._failures = 0
        self._teardowns = 0
        self._teardown_failures = 0
        self._ops_submitted = 0
        self._last_error: Optional[str] = None

    def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Tick until stop() is called (or max_ticks ticks have run).

        Sleeping uses Event.wait so stop() interrupts it. A stop() that
        arrives before run() is honoured; a stopped bot stays stopped.
        """
        ran = 0
        logger.info(f"Bot started for account {self._account}, tick every {self._tick_interval}s")

        while not self._stop_event.is_set():
            self.update()
            ran += 1
            if max_ticks is not None and ran >= max_ticks:
                break

            logger.info(f"sleeping for {self._tick_interval} seconds...")
            if self._stop_event.wait(self._tick_interval):
                break

        logger.info(f"Bot stopped. Ticks={self._ticks}, Failures={self._failures}, Teardowns={self._teardowns}")

    def stop(self) -> None:
        self._stop_event.set()

    def update(self) -> TickResult:
        """Run one tick. Never raises; failures end in a teardown."""
        self._ticks += 1
        phase = TickPhase.LOAD_BALANCES
        submitted = 0

        try:
            balances = self._reader.load_balances(self._account)

            phase = TickPhase.LOAD_ORDERS
            self._load_existing_offers()

            # strategy has a chance to set any state it needs
            phase = TickPhase.PRE_UPDATE
            self._strategy.pre_update(balances)

            # delete excess offers
            phase = TickPhase.PRUNE
            prune_ops, buy_orders, sell_orders = self._strategy.prune_existing_offers(
                self._buy_orders, self._sell_orders
            )
            if prune_ops:
                self._submit(prune_ops)
                submitted += len(prune_ops)
            self._buy_orders, self._sell_orders = buy_orders, sell_orders

            phase = TickPhase.COMPUTE_UPDATES
            ops = self._strategy.update_with_ops(self._buy_orders, self._sell_orders)

            phase = TickPhase.SUBMIT
            if ops:
                self._submit(ops)
                submitted += len(ops)

            phase = TickPhase.POST_UPDATE
            self._strategy.post_update()

        except Exception as e:
            self._failures += 1
            self._ops_submitted += submitted
            self._last_error = f"{phase.name}: {e}"
            logger.warning(f"tick {self._ticks} failed in {phase.name}: {e}")
            teardown_ok = self.delete_all_offers()
            return TickResult(
                success=False,
                failed_phase=phase,
                error=str(e),
                ops_submitted=submitted,
                teardown_attempted=True,
                teardown_ok=teardown_ok,
            )

        self._ops_submitted += submitted
        return TickResult(success=True, ops_submitted=submitted)

    def delete_all_offers(self) -> bool:
        """
        Cancel every offer the bot owns (not every offer on the account).

        Reloads the offers first so orders created earlier in a failed tick
        are included. If the ledger cannot be read, the last snapshot is
        cancelled instead, but the snapshot misses orders created since the
        last load, so the teardown is reported as unconfirmed.

        Returns:
            True if the reloaded book was cleared (or already empty)
        """
        self._teardowns += 1

        confirmed = True
        buy_orders, sell_orders = self._buy_orders, self._sell_orders
        try:
            buy_orders, sell_orders = self._reader.load_own_orders(self._account)
        except Exception as e:
            confirmed = False
            logger.warning(f"could not reload offers for teardown, using last snapshot: {e}")

        ops = [OperationIntent.cancel(o) for o in sell_orders]
        ops.extend(OperationIntent.cancel(o) for o in buy_orders)
        self._buy_orders = []
        self._sell_orders = []

        logger.info(f"deleting {len(ops)} offers")
        if ops:
            try:
                self._submit(ops)
                self._ops_submitted += len(ops)
            except Exception as e:
                confirmed = False
                logger.warning(f"teardown failed: {e}")

        if not confirmed:
            self._teardown_failures += 1
            logger.warning("teardown not confirmed, offers may still be resting")
        return confirmed

    def _load_existing_offers(self) -> None:
        buy_orders, sell_orders = self._reader.load_own_orders(self._account)
        self._buy_orders = sort_best_first(buy_orders, Side.BUY)
        self._sell_orders = sort_best_first(sell_orders, Side.SELL)

    def _submit(self, ops: list[OperationIntent]) -> None:
        logger.info(f"submitting {len(ops)} op(s)")
        self._submitter.submit(ops)

    @property
    def buy_orders(self) -> list[RestingOrder]:
        return list(self._buy_orders)

    @property
    def sell_orders(self) -> list[RestingOrder]:
        return list(self._sell_orders)

    @property
    def stats(self) -> dict:
        """Get bot statistics."""
        return {
            "ticks": self._ticks,
            "failures": self._failures,
            "teardowns": self._teardowns,
            "teardown_failures": self._teardown_failures,
            "ops_submitted": self._ops_submitted,
            "last_error": self._last_error,
        }
