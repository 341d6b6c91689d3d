"""
Tests for sampling rows out of HuggingFace datasets, both map-style and
streaming.
"""
from __future__ import annotations

import pytest
from datasets import Dataset

from randline.dataset_sampler import sample_dataset
from randline.errors import InvalidSampleSizeError
from randline.random_source import ScriptedRandomSource


@pytest.fixture()
def articles() -> Dataset:
    return Dataset.from_dict(
        {
            "id": list(range(100)),
            "text": [f"article {i}" for i in range(100)],
        }
    )


def test_samples_k_rows_in_index_order(articles):
    sampled = sample_dataset(articles, 10, seed=42)

    assert len(sampled) == 10
    ids = sampled["id"]
    assert ids == sorted(ids)
    assert len(set(ids)) == 10
    for row in sampled:
        assert row["text"] == f"article {row['id']}"


def test_k_at_least_size_returns_dataset_unchanged(articles):
    assert sample_dataset(articles, 100, seed=0) is articles
    assert sample_dataset(articles, 1000, seed=0) is articles


def test_k_zero_selects_nothing(articles):
    assert len(sample_dataset(articles, 0)) == 0


def test_streaming_dataset_is_materialized(articles):
    streaming = articles.to_iterable_dataset()
    sampled = sample_dataset(streaming, 5, seed=1)

    assert isinstance(sampled, Dataset)
    assert len(sampled) == 5
    assert set(sampled.column_names) == {"id", "text"}
    assert set(sampled["id"]) <= set(range(100))


def test_streaming_dataset_smaller_than_k(articles):
    small = articles.select(range(3)).to_iterable_dataset()
    sampled = sample_dataset(small, 10, seed=1)
    assert sampled["id"] == [0, 1, 2]


def test_explicit_source_is_used(articles):
    source = ScriptedRandomSource([0.25, 0.3, 0.75, 0.25, 0.9, 0.1, 0.5, 0.01])
    small = articles.select(range(6))

    sampled = sample_dataset(small, 2, source=source)

    # Same draws as the hand-worked reservoir [4, 3] over indices 0..5
    assert sampled["id"] == [3, 4]


def test_invalid_k(articles):
    with pytest.raises(InvalidSampleSizeError):
        sample_dataset(articles, -1)
