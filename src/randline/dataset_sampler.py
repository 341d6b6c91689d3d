"""Reservoir sampling over HuggingFace datasets."""

import logging
from typing import Optional, Union

from datasets import Dataset, IterableDataset

from .random_source import RandomSource
from .sampler import reservoir_sample, validate_sample_size

logger = logging.getLogger(__name__)


def sample_dataset(
    dataset: Union[Dataset, IterableDataset],
    k: int,
    seed: Optional[int] = None,
    source: Optional[RandomSource] = None,
) -> Dataset:
    """Select k rows from a dataset in a single pass.

    Map-style datasets are sampled by row index and then selected, so rows are
    never decoded twice. Streaming datasets have no length; their rows are
    sampled directly and materialized.

    Args:
        dataset: Input dataset, map-style or streaming.
        k: Number of rows to sample.
        seed: Random seed.
        source: Explicit randomness source (mutually exclusive with seed).

    Returns:
        Dataset with min(k, n) rows.
    """
    k = validate_sample_size(k)

    if isinstance(dataset, IterableDataset):
        logger.info("Sampling %d rows from a streaming dataset", k)
        rows = reservoir_sample(iter(dataset), k, source=source, seed=seed)
        return Dataset.from_list(rows, features=dataset.features)

    total_size = len(dataset)

    # If k >= total, return full dataset
    if k >= total_size:
        return dataset

    logger.info("Sampling %d from %d rows", k, total_size)
    indices = reservoir_sample(range(total_size), k, source=source, seed=seed)
    indices = sorted(indices)  # Sort for cache-friendly access

    return dataset.select(indices)
