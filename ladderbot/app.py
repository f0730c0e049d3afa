"""
Market maker application.

Wires the ledger collaborators, the strategy and the bot loop together
and manages process lifecycle. Single-threaded: the bot loop runs in the
main thread and signals only ask it to stop.
"""

import logging
import signal
import sys
from typing import Optional

from .bot import Bot
from .clients import DryRunSubmitter, HorizonClient, LedgerReader, OperationSubmitter, PaperLedger
from .config import AppConfig
from .errors import ConfigError
from .strategy import Strategy, make_autonomous_strategy
from .types import Asset

logger = logging.getLogger(__name__)

PAPER_ACCOUNT = "paper"


class BotApplication:
    """
    Main application.

    - Startup: validate config, build collaborators and strategy
    - Running: tick until a signal arrives
    - Shutdown: cancel the bot's offers
    """

    def __init__(
        self,
        config: AppConfig,
        strategy: Optional[Strategy] = None,
    ):
        """
        Args:
            config: Application configuration
            strategy: Optional custom strategy (autonomous strategy if None)

        Raises:
            ConfigError: If the configuration is invalid
        """
        errors = config.validate()
        if errors:
            raise ConfigError("; ".join(errors))

        self._config = config
        self._reader, self._submitter, account = self._setup_ledger(config)
        self._strategy = strategy or make_autonomous_strategy(config.strategy_config())
        self._bot = Bot(
            reader=self._reader,
            submitter=self._submitter,
            strategy=self._strategy,
            account=account,
            tick_interval_seconds=config.tick_interval_seconds,
        )

    @staticmethod
    def _setup_ledger(config: AppConfig) -> tuple[LedgerReader, OperationSubmitter, str]:
        if config.ledger_mode == "paper":
            ledger = PaperLedger(
                max_base=config.paper_base_balance,
                max_quote=config.paper_quote_balance,
                account=PAPER_ACCOUNT,
            )
            logger.info("Using paper ledger")
            return ledger, ledger, PAPER_ACCOUNT

        reader = HorizonClient(
            asset_base=Asset.parse(config.asset_base),
            asset_quote=Asset.parse(config.asset_quote),
            base_url=config.horizon_url,
        )
        logger.info(f"Reading account {config.trading_account} from {config.horizon_url} (dry run submits)")
        return reader, DryRunSubmitter(), config.trading_account

    @property
    def bot(self) -> Bot:
        return self._bot

    def run(self) -> None:
        """Run until SIGINT/SIGTERM, then tear down the bot's offers."""

        def signal_handler(signum, frame):
            logger.warning(f"Received signal {signum} - stopping after current tick")
            self._bot.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        try:
            self._bot.run()
        except Exception as e:
            logger.exception(f"Application error: {e}")
        finally:
            self.stop()

    def stop(self) -> None:
        logger.info("Cancelling all offers...")
        if not self._bot.delete_all_offers():
            logger.warning("Cancel-all on shutdown failed")
        if isinstance(self._reader, HorizonClient):
            self._reader.close()
        logger.info(f"Stats: {self._bot.stats}")


def main() -> None:
    """Entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    config = AppConfig.from_env_file(".env")

    if config.log_level:
        logging.getLogger().setLevel(config.log_level)

    try:
        app = BotApplication(config)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    app.run()


if __name__ == "__main__":
    main()
