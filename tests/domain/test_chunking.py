"""Tests for multipart chunk planning."""

from __future__ import annotations

import pytest

from s3file.domain.chunking import (
    DEFAULT_PART_SIZE,
    GiB,
    MAX_PART_COUNT,
    MAX_PART_SIZE,
    MIN_PART_SIZE,
    MiB,
    fit_part_size,
    part_count,
    plan_chunks,
    resolve_part_size,
)


class TestResolvePartSize:
    def test_unset_uses_default(self):
        assert resolve_part_size(None) == DEFAULT_PART_SIZE
        assert resolve_part_size(0) == DEFAULT_PART_SIZE
        assert DEFAULT_PART_SIZE == 1 * GiB

    def test_unset_uses_configured_default(self):
        assert resolve_part_size(None, default=64 * MiB) == 64 * MiB

    def test_below_floor_is_raised(self):
        assert resolve_part_size(1024) == MIN_PART_SIZE
        assert resolve_part_size(MIN_PART_SIZE - 1) == MIN_PART_SIZE

    def test_valid_size_is_kept(self):
        assert resolve_part_size(8 * MiB) == 8 * MiB

    def test_above_ceiling_is_lowered(self):
        assert resolve_part_size(MAX_PART_SIZE + 1) == MAX_PART_SIZE


class TestPartCount:
    @pytest.mark.parametrize(
        ("file_size", "chunk_size", "expected"),
        [
            (0, MIN_PART_SIZE, 1),
            (1, MIN_PART_SIZE, 1),
            (MIN_PART_SIZE - 1, MIN_PART_SIZE, 1),
            (MIN_PART_SIZE, MIN_PART_SIZE, 1),
            (MIN_PART_SIZE + 1, MIN_PART_SIZE, 2),
            (10 * MiB, 5 * MiB, 2),
            (12 * MiB, 5 * MiB, 3),
        ],
    )
    def test_counts(self, file_size, chunk_size, expected):
        assert part_count(file_size, chunk_size) == expected

    def test_rejects_invalid_input(self):
        with pytest.raises(ValueError):
            part_count(-1, MIN_PART_SIZE)
        with pytest.raises(ValueError):
            part_count(10, 0)


class TestPlanChunks:
    def test_twelve_mib_in_five_mib_chunks(self):
        plan = plan_chunks(12 * MiB, 5 * MiB)

        assert [c.index for c in plan] == [1, 2, 3]
        assert [c.length for c in plan] == [5 * MiB, 5 * MiB, 2 * MiB]
        assert [c.offset for c in plan] == [0, 5 * MiB, 10 * MiB]

    def test_exact_multiple_has_no_extra_part(self):
        plan = plan_chunks(10 * MiB, 5 * MiB)

        assert [c.length for c in plan] == [5 * MiB, 5 * MiB]

    def test_small_file_is_single_part(self):
        plan = plan_chunks(1234, MIN_PART_SIZE)

        assert len(plan) == 1
        assert plan[0].length == 1234

    def test_empty_file_is_single_empty_part(self):
        plan = plan_chunks(0, MIN_PART_SIZE)

        assert len(plan) == 1
        assert plan[0].index == 1
        assert plan[0].length == 0

    @pytest.mark.parametrize(
        "file_size",
        [0, 1, MIN_PART_SIZE - 1, MIN_PART_SIZE, 3 * MIN_PART_SIZE + 7, 47 * MiB + 3],
    )
    def test_lengths_sum_to_file_size(self, file_size):
        plan = plan_chunks(file_size, MIN_PART_SIZE)

        assert sum(c.length for c in plan) == file_size
        assert len(plan) == part_count(file_size, MIN_PART_SIZE)
        assert [c.index for c in plan] == list(range(1, len(plan) + 1))
        if file_size:
            assert all(c.length > 0 for c in plan)
            remainder = file_size % MIN_PART_SIZE
            assert plan[-1].length == (remainder or MIN_PART_SIZE)


class TestFitPartSize:
    def test_keeps_size_when_parts_fit(self):
        assert fit_part_size(100 * MiB, MIN_PART_SIZE) == MIN_PART_SIZE

    def test_grows_size_to_stay_within_part_limit(self):
        file_size = MAX_PART_COUNT * MIN_PART_SIZE + 1

        size = fit_part_size(file_size, MIN_PART_SIZE)

        assert size > MIN_PART_SIZE
        assert size % MiB == 0
        assert part_count(file_size, size) <= MAX_PART_COUNT
