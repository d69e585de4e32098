"""
Exception types shared by the battle kit.

Only configuration mistakes raise. Empty inventories, missing targets and
aborted waits are ordinary outcomes and travel as messages or the
``NO_ACTION`` sentinel instead.
"""


class BattleKitError(Exception):
    """Base class for battle kit errors."""


class ConfigError(BattleKitError):
    """Configuration file missing or invalid."""


class ActionLabelError(BattleKitError, ValueError):
    """Action controls were given the wrong number of labels."""


class RendezvousBusyError(BattleKitError, RuntimeError):
    """A second action request was made while one is still pending."""
