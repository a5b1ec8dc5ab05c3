"""Exception types for the pay engine."""


class PayMapError(Exception):
    """Base error for the pay engine."""

    pass


class ConfigError(PayMapError):
    """Configuration could not be parsed or validated."""

    pass


class BuilderStateError(PayMapError):
    """A builder was asked for a result before its required inputs were supplied."""

    pass
