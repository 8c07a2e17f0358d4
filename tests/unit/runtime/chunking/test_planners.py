"""Unit tests for chunk planning logic."""

from __future__ import annotations

import pytest

from versium.reach.runtime.chunking import ChunkPlan, ChunkPlanner, ChunkPolicy, chunk_items


class TestChunkPolicy:
    """Test ChunkPolicy validation."""

    def test_window_includes_pad(self):
        policy = ChunkPolicy(size=20, pad=0.1)
        assert policy.interval == 1.0
        assert policy.window == pytest.approx(1.1)

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            ChunkPolicy(size=0)

    def test_negative_pad_rejected(self):
        with pytest.raises(ValueError):
            ChunkPolicy(size=1, pad=-0.1)


class TestChunkItems:
    def test_even_split(self):
        assert chunk_items([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_last_chunk_smaller(self):
        assert chunk_items(list(range(7)), 3) == [[0, 1, 2], [3, 4, 5], [6]]

    def test_empty(self):
        assert chunk_items([], 3) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk_items([1], 0)


class TestChunkPlanner:
    """Test ChunkPlanner functionality."""

    def test_seven_records_budget_three(self):
        records = [{"id": i} for i in range(7)]
        planner = ChunkPlanner(ChunkPolicy(size=3))

        plans = planner.plan(records)

        assert [len(p.items) for p in plans] == [3, 3, 1]
        assert [p.chunk_index for p in plans] == [0, 1, 2]
        assert [p.offset for p in plans] == [0, 3, 6]
        assert all(p.total_chunks == 3 for p in plans)
        assert [p.is_last for p in plans] == [False, False, True]
        assert [item for p in plans for item in p.items] == records

    def test_single_chunk_is_last(self):
        plans = ChunkPlanner(ChunkPolicy(size=20)).plan([{"id": 1}])
        assert len(plans) == 1
        assert plans[0].is_last

    def test_empty_batch(self):
        assert ChunkPlanner(ChunkPolicy(size=5)).plan([]) == []

    def test_plan_defaults(self):
        plan = ChunkPlan(items=[1])
        assert plan.chunk_index == 0
        assert plan.is_last
