"""Exception types raised by randline."""


class RandlineError(Exception):
    """Base class for all randline errors."""


class InvalidSampleSizeError(RandlineError, ValueError):
    """Raised when the requested sample size is not a non-negative integer."""


class RandomSourceError(RandlineError, RuntimeError):
    """Raised when a randomness source breaks its (0, 1) contract."""


class ConfigError(RandlineError, ValueError):
    """Raised for invalid configuration values."""
