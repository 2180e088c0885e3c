"""Tests for the ApplePositionPool module."""

from collections import Counter

import numpy as np
import pytest

from shortcut_snake.apple import ApplePositionPool


def _assert_consistent(pool: ApplePositionPool) -> None:
    for slot, cell in enumerate(pool.positions):
        assert pool.slots[cell[0] * pool.size + cell[1]] == slot


class TestPoolInit:
    def test_all_vacant(self):
        pool = ApplePositionPool(5)
        assert len(pool) == 25
        _assert_consistent(pool)

    def test_occupied_cells_excluded(self):
        pool = ApplePositionPool(5, occupied=[(0, 0), (2, 2)])
        assert len(pool) == 23
        assert (0, 0) not in pool
        assert (2, 2) not in pool
        assert (1, 1) in pool
        _assert_consistent(pool)

    def test_vacant_cells_come_first_in_row_major_order(self):
        pool = ApplePositionPool(5, occupied=[(0, 0)])
        assert pool.vacant()[:2] == [(0, 1), (0, 2)]

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="at least 1"):
            ApplePositionPool(0)


class TestPoolPick:
    def test_pick_returns_vacant_cell(self):
        pool = ApplePositionPool(5, occupied=[(r, 0) for r in range(5)],
                                 rng=np.random.default_rng(3))
        for _ in range(50):
            assert pool.pick() in pool

    def test_pick_does_not_remove(self):
        pool = ApplePositionPool(5, rng=np.random.default_rng(0))
        pool.pick()
        assert len(pool) == 25

    def test_pick_deterministic(self):
        picks_a = self._picks_with_seed(42)
        picks_b = self._picks_with_seed(42)
        assert picks_a == picks_b

    def test_pick_on_empty_pool(self):
        pool = ApplePositionPool(1, occupied=[(0, 0)])
        with pytest.raises(LookupError, match="No vacant cells"):
            pool.pick()

    def test_pick_is_uniform(self):
        occupied = [(r, c) for r in range(5) for c in range(5) if r > 0]
        pool = ApplePositionPool(5, occupied=occupied,
                                 rng=np.random.default_rng(0))
        counts = Counter(pool.pick() for _ in range(5000))
        assert set(counts) == {(0, c) for c in range(5)}
        for count in counts.values():
            assert 850 < count < 1150

    @staticmethod
    def _picks_with_seed(seed: int) -> list[tuple[int, int]]:
        pool = ApplePositionPool(6, rng=np.random.default_rng(seed))
        return [pool.pick() for _ in range(10)]


class TestPoolUpdates:
    def test_remove_then_insert_restores_vacant_set(self):
        pool = ApplePositionPool(5, occupied=[(4, 4)])
        before = set(pool.vacant())
        assert pool.remove((2, 3))
        assert (2, 3) not in pool
        assert len(pool) == 23
        assert pool.insert((2, 3))
        assert set(pool.vacant()) == before
        _assert_consistent(pool)

    def test_remove_occupied_returns_false(self):
        pool = ApplePositionPool(5, occupied=[(0, 0)])
        assert not pool.remove((0, 0))
        assert len(pool) == 24

    def test_insert_vacant_returns_false(self):
        pool = ApplePositionPool(5)
        assert not pool.insert((1, 1))
        assert len(pool) == 25

    def test_swap_trades_membership(self):
        pool = ApplePositionPool(5, occupied=[(0, 0)])
        pool.swap(occupied=(3, 3), vacated=(0, 0))
        assert (0, 0) in pool
        assert (3, 3) not in pool
        assert len(pool) == 24
        _assert_consistent(pool)

    def test_swap_rejects_wrong_sides(self):
        pool = ApplePositionPool(5, occupied=[(0, 0)])
        with pytest.raises(ValueError, match="Cannot swap"):
            pool.swap(occupied=(0, 0), vacated=(1, 1))

    def test_random_updates_stay_consistent(self):
        rng = np.random.default_rng(7)
        pool = ApplePositionPool(6, rng=rng)
        vacant = set(pool.vacant())
        for _ in range(300):
            cell = (int(rng.integers(6)), int(rng.integers(6)))
            if cell in vacant:
                assert pool.remove(cell)
                vacant.discard(cell)
            else:
                assert pool.insert(cell)
                vacant.add(cell)
            assert set(pool.vacant()) == vacant
        _assert_consistent(pool)


class TestPoolSerialization:
    def test_to_dict(self):
        pool = ApplePositionPool(5, occupied=[(0, 0)])
        d = pool.to_dict()
        assert d["size"] == 5
        assert len(d["vacant"]) == 24
