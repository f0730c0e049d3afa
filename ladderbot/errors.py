"""
Exception hierarchy.

Configuration problems surface at construction time and stop startup.
Everything raised while a tick is running is caught by the bot loop,
logged, and answered with a teardown of the bot's orders.
"""


class LadderBotError(Exception):
    """Base class for all market maker errors."""
    pass


class ConfigError(LadderBotError):
    """Invalid configuration; the bot must not start."""
    pass


class BalanceError(LadderBotError):
    """Balance snapshot is inconsistent or unusable."""
    pass


class LedgerError(LadderBotError):
    """Failed to read account state from the ledger."""
    pass


class SubmissionError(LadderBotError):
    """A batch of operations was rejected; nothing in it was applied."""
    pass
