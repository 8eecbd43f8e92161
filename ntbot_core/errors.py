"""Exceptions raised by the core."""


class ConfigError(ValueError):
    """A strategy, risk, or instrument parameter is missing or invalid.

    Raised at configuration time so that nothing starts with a bad setup.
    """
