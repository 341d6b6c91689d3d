"""
Statistical checks that the sampler is uniform. All runs use a fixed seed, and
tolerances are loose enough that a correct sampler passes comfortably.
"""
from __future__ import annotations

import itertools
from collections import Counter

import numpy as np
from scipy.stats import chisquare

from randline.random_source import NumpyRandomSource
from randline.sampler import reservoir_sample


def test_every_pair_of_five_is_equally_likely():
    source = NumpyRandomSource(np.random.default_rng(20240601))
    trials = 10000

    counts = Counter(
        frozenset(reservoir_sample([1, 2, 3, 4, 5], 2, source=source))
        for _ in range(trials)
    )

    pairs = [frozenset(p) for p in itertools.combinations([1, 2, 3, 4, 5], 2)]
    assert set(counts) == set(pairs)
    observed = [counts[p] for p in pairs]
    # ~1000 each
    assert all(800 < c < 1200 for c in observed)
    assert chisquare(observed).pvalue > 1e-4


def test_item_inclusion_frequency_is_k_over_n():
    source = NumpyRandomSource(np.random.default_rng(77))
    n, k, trials = 20, 5, 5000

    counts = Counter()
    for _ in range(trials):
        counts.update(reservoir_sample(range(n), k, source=source))

    for item in range(n):
        assert abs(counts[item] / trials - k / n) < 0.03


def test_uniform_across_long_stream_with_skipping():
    source = NumpyRandomSource(np.random.default_rng(4242))
    n, k, trials, buckets = 1000, 10, 3000, 10

    observed = np.zeros(buckets, dtype=int)
    for _ in range(trials):
        for item in reservoir_sample(iter(range(n)), k, source=source):
            observed[item * buckets // n] += 1

    assert observed.sum() == k * trials
    assert chisquare(observed).pvalue > 1e-4
