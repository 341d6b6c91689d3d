"""Configuration for sampling runs."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from .errors import ConfigError


@dataclass
class SamplerConfig:
    """Settings for a line-sampling run.

    Attributes:
        k: Number of lines to select.
        seed: Optional seed for the default randomness source.
        delimiter: Record separator used to split the input.
        strip_delimiter: Drop the separator from each record before sampling.
        progress: Show a progress bar while reading input.
    """

    k: int = 1
    seed: Optional[int] = None
    delimiter: str = "\n"
    strip_delimiter: bool = True
    progress: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SamplerConfig":
        """Build a config from a dictionary.

        Args:
            data: Mapping of field names to values.

        Returns:
            Validated SamplerConfig.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        cfg = cls(**data)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """Check field values, raising ConfigError on the first problem."""
        if isinstance(self.k, bool) or not isinstance(self.k, int):
            raise ConfigError(f"k must be an integer, got {self.k!r}")
        if self.k < 1:
            raise ConfigError(f"k must be at least 1, got {self.k}")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if not self.delimiter:
            raise ConfigError("delimiter must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
