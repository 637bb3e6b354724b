"""Exception types for the rental engine."""


class RentalError(Exception):
    """Base class for rental engine errors."""


class RentalStateError(RentalError):
    """Raised on an illegal rental state transition (e.g. completing twice)."""


class ConfigError(RentalError):
    """Raised when a configuration file cannot be read or fails validation."""
