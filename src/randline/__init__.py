"""randline: uniform random sampling of lines and other streams."""

from .config import SamplerConfig
from .errors import (
    ConfigError,
    InvalidSampleSizeError,
    RandlineError,
    RandomSourceError,
)
from .random_source import (
    NumpyRandomSource,
    RandomSource,
    ScriptedRandomSource,
    resolve_source,
)
from .sampler import ReservoirSampler, reservoir_sample, validate_sample_size

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "InvalidSampleSizeError",
    "NumpyRandomSource",
    "RandlineError",
    "RandomSource",
    "RandomSourceError",
    "ReservoirSampler",
    "SamplerConfig",
    "ScriptedRandomSource",
    "reservoir_sample",
    "resolve_source",
    "validate_sample_size",
]
