"""Randomness sources for the reservoir sampler."""

from typing import Iterable, Optional, Protocol, Union

import numpy as np

from .errors import ConfigError, RandomSourceError


class RandomSource(Protocol):
    """Anything that can produce uniform values in the open interval (0, 1)."""

    def uniform(self) -> float:
        ...


class NumpyRandomSource:
    """Random source backed by a numpy ``Generator``.

    ``Generator.random()`` draws from [0, 1); the rare exact 0.0 is redrawn so
    callers always see values strictly inside (0, 1).
    """

    def __init__(self, seed: Union[int, np.random.Generator, None] = None) -> None:
        if isinstance(seed, np.random.Generator):
            self._rng = seed
        else:
            self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        value = self._rng.random()
        while value == 0.0:
            value = self._rng.random()
        return float(value)


class ScriptedRandomSource:
    """Replays a fixed sequence of draws.

    Useful for regression tests: the same script always yields the same
    reservoir.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = list(values)
        self.draws = 0

    def uniform(self) -> float:
        if self.draws >= len(self._values):
            raise RandomSourceError(
                f"Scripted source exhausted after {self.draws} draws"
            )
        value = self._values[self.draws]
        self.draws += 1
        return value


def resolve_source(
    source: Optional[RandomSource] = None, seed: Optional[int] = None
) -> RandomSource:
    """Return ``source``, or a numpy-backed source seeded with ``seed``.

    Args:
        source: Explicit randomness source.
        seed: Seed for the default numpy source.

    Returns:
        A randomness source.
    """
    if source is not None and seed is not None:
        raise ConfigError("Pass either source or seed, not both")
    if source is not None:
        return source
    return NumpyRandomSource(seed)
