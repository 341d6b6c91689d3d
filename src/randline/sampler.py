"""Single-pass reservoir sampling (Algorithm L)."""

import logging
import math
import sys
from itertools import islice
from numbers import Integral
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from .errors import InvalidSampleSizeError, RandomSourceError
from .random_source import RandomSource, resolve_source

logger = logging.getLogger(__name__)

T = TypeVar("T")

# islice() refuses counts above sys.maxsize
_MAX_SKIP = float(sys.maxsize)


def validate_sample_size(k: object) -> int:
    """Check that ``k`` is a non-negative integer and return it as ``int``."""
    if isinstance(k, bool) or not isinstance(k, Integral):
        raise InvalidSampleSizeError(f"Sample size must be an integer, got {k!r}")
    if k < 0:
        raise InvalidSampleSizeError(f"Sample size must be non-negative, got {k}")
    return int(k)


class ReservoirSampler(Generic[T]):
    """Uniform random sample of ``k`` items from a stream of unknown length.

    Implements Li's Algorithm L. After the reservoir is filled with the first
    ``k`` items, the number of items to pass over before the next replacement
    is drawn in closed form, so the number of random draws grows with
    ``k * log(n / k)`` instead of ``n``. Memory stays O(k).

    Items can be pushed one at a time with :meth:`offer` or pulled from an
    iterable with :meth:`consume`; both share the same state. At any point
    :meth:`sample` returns a uniform sample of the items seen so far.

    The sampler never compares, hashes or otherwise inspects items.
    """

    def __init__(
        self,
        k: int,
        source: Optional[RandomSource] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the sampler.

        Args:
            k: Number of items to keep.
            source: Randomness source producing values in (0, 1).
            seed: Seed for the default numpy source (ignored if ``source``).
        """
        self._k = validate_sample_size(k)
        self._source = resolve_source(source, seed)
        self._reservoir: List[T] = []
        self._items_seen = 0
        self._replacements = 0
        self._draws = 0
        self._w = 0.0
        # None once no further replacement can happen
        self._skip: Optional[int] = 0

    @property
    def k(self) -> int:
        return self._k

    @property
    def items_seen(self) -> int:
        return self._items_seen

    @property
    def replacements(self) -> int:
        return self._replacements

    @property
    def draws(self) -> int:
        return self._draws

    @property
    def is_full(self) -> bool:
        return len(self._reservoir) >= self._k

    def __len__(self) -> int:
        return len(self._reservoir)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(k={self._k}, size={len(self._reservoir)}, "
            f"items_seen={self._items_seen})"
        )

    def _draw(self) -> float:
        value = self._source.uniform()
        if not 0.0 < value < 1.0:
            raise RandomSourceError(
                f"Randomness source returned {value!r}, expected a value in (0, 1)"
            )
        self._draws += 1
        return value

    def _scale_weight(self) -> None:
        # W <- W * U^(1/k), computed in log space
        self._w *= math.exp(math.log(self._draw()) / self._k)

    def _next_skip(self) -> None:
        u = self._draw()
        if self._w >= 1.0:
            self._skip = 0
            return
        log_keep = math.log1p(-self._w)
        if log_keep == 0.0:
            # W underflowed; the next replacement is infinitely far away
            self._skip = None
            return
        gap = math.log(u) / log_keep
        self._skip = math.floor(gap) if gap < _MAX_SKIP else None

    def _start_skipping(self) -> None:
        self._w = 1.0
        self._scale_weight()
        self._next_skip()

    def _replace(self, item: T) -> None:
        slot = min(int(self._draw() * self._k), self._k - 1)
        self._reservoir[slot] = item
        self._replacements += 1
        self._scale_weight()
        self._next_skip()

    def offer(self, item: T) -> None:
        """Push a single item through the sampler.

        Args:
            item: The next item of the stream.
        """
        self._items_seen += 1

        if len(self._reservoir) < self._k:
            self._reservoir.append(item)
            if self.is_full:
                self._start_skipping()
            return

        if self._k == 0 or self._skip is None:
            return
        if self._skip > 0:
            self._skip -= 1
            return
        self._replace(item)

    def consume(self, items: Iterable[T]) -> "ReservoirSampler[T]":
        """Pull items from ``items`` until it is exhausted.

        Skipped items are pulled and dropped in bulk without any random
        draws. With ``k == 0`` the iterable is left untouched.

        Args:
            items: Iterable of items, consumed exactly once.

        Returns:
            The sampler itself.
        """
        if self._k == 0:
            return self

        iterator: Iterator[T] = iter(items)

        # Fill phase
        for item in islice(iterator, self._k - len(self._reservoir)):
            self.offer(item)
        if not self.is_full:
            return self

        # Skip-and-replace phase
        while True:
            if self._skip is None:
                self._items_seen += sum(1 for _ in iterator)
                return self

            passed = sum(1 for _ in islice(iterator, self._skip))
            self._items_seen += passed
            self._skip -= passed
            if self._skip > 0:
                return self

            try:
                item = next(iterator)
            except StopIteration:
                return self
            self._items_seen += 1
            self._replace(item)

    def sample(self) -> List[T]:
        """Return a copy of the current reservoir, in slot order."""
        return list(self._reservoir)


def reservoir_sample(
    items: Iterable[T],
    k: int,
    source: Optional[RandomSource] = None,
    seed: Optional[int] = None,
) -> List[T]:
    """Select a uniform random subset of ``k`` items in a single pass.

    Args:
        items: Iterable of items, possibly lazy and of unknown length.
        k: Number of items to select.
        source: Randomness source producing values in (0, 1).
        seed: Seed for the default numpy source.

    Returns:
        A list of ``min(k, n)`` items in reservoir-slot order. If the stream
        has fewer than ``k`` items, all of them in arrival order.
    """
    sampler: ReservoirSampler[T] = ReservoirSampler(k, source=source, seed=seed)
    sampler.consume(items)

    logger.debug(
        "Sampled %d of %d items (%d replacements, %d random draws)",
        len(sampler),
        sampler.items_seen,
        sampler.replacements,
        sampler.draws,
    )
    return sampler.sample()
