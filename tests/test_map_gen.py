"""
Test suite for local map generation.
Checks board shape, point symmetry, grass coverage and player placement.
"""

import numpy as np
import pytest

from map_gen import generate_scrap_grid, generate_snapshot, starting_patches
from models import Coordinate, Owner, Zone
from frontier import assign_zone
from state import DEFAULT_CONFIG, apply_snapshot, initialize_session


class TestScrapGrid:
    def test_shape(self):
        scrap = generate_scrap_grid(12, 6, seed=42)
        assert scrap.shape == (6, 12)

    def test_point_symmetric(self):
        scrap = generate_scrap_grid(13, 7, seed=7)
        assert np.array_equal(scrap, np.rot90(scrap, 2))

    def test_values_in_range(self):
        scrap = generate_scrap_grid(12, 6, seed=42, max_scrap=8)
        assert scrap.min() >= 0
        assert scrap.max() <= 8

    def test_grass_share(self):
        scrap = generate_scrap_grid(20, 10, seed=3, grass_share=0.3)
        share = np.count_nonzero(scrap == 0) / scrap.size
        assert 0.2 <= share <= 0.4

    def test_no_grass(self):
        scrap = generate_scrap_grid(10, 5, seed=1, grass_share=0.0)
        assert np.count_nonzero(scrap == 0) == 0

    def test_reproducible(self):
        assert np.array_equal(generate_scrap_grid(10, 5, seed=9), generate_scrap_grid(10, 5, seed=9))


class TestSnapshot:
    def test_patches_mirror(self):
        ours, theirs = starting_patches(12, 6)
        assert ours[0] == Coordinate(3, 3)
        assert theirs[0] == Coordinate(8, 2)
        assert len(ours) == len(theirs) == 5

    def test_layout(self):
        snapshot = generate_snapshot(12, 6, seed=42)
        assert len(snapshot.rows) == 6
        assert all(len(row) == 12 for row in snapshot.rows)

    def test_starting_cells_passable_and_owned(self):
        snapshot = generate_snapshot(12, 6, seed=42)
        ours, theirs = starting_patches(12, 6)
        for c in ours:
            state = snapshot.rows[c.y][c.x]
            assert state.scrap_amount > 0
            assert state.owner == Owner.ME
        for c in theirs:
            state = snapshot.rows[c.y][c.x]
            assert state.scrap_amount > 0
            assert state.owner == Owner.OPPONENT

    def test_we_start_on_the_left(self):
        session = initialize_session(12, 6, dict(DEFAULT_CONFIG))
        apply_snapshot(session, generate_snapshot(12, 6, seed=5))
        assert assign_zone(session.board) == Zone.LEFT

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_units_only_on_centres(self, seed):
        snapshot = generate_snapshot(12, 6, seed=seed)
        units = [(x, y) for y, row in enumerate(snapshot.rows) for x, s in enumerate(row) if s.units > 0]
        assert sorted(units) == [(3, 3), (8, 2)]
