"""Tests for egghunt.grid.cell and egghunt.grid.noise."""

import numpy as np
import pytest
from numpy.random import Generator

from egghunt.grid.cell import Cell, GridCellResult
from egghunt.grid.noise import SimplexNoise, UniformNoise, make_noise


class TestCell:
    """Tests for index/position conversion."""

    def test_from_index(self) -> None:
        cell = Cell.from_index(9, width=4)
        assert (cell.col, cell.row) == (1, 2)

    def test_from_position_round_trips(self) -> None:
        cell = Cell.from_position(3, 5, width=8)
        assert cell.index == 43
        assert Cell.from_index(cell.index, width=8) == cell

    def test_negative_index(self) -> None:
        with pytest.raises(IndexError):
            Cell.from_index(-1, width=4)

    def test_result_defaults(self) -> None:
        result = GridCellResult(index=0, col=0, row=0, band=4, background_category="path")
        assert result.collectible_category is None
        assert result.decoration_category is None
        assert result.is_winner is False
        assert not result.has_collectible


class TestSimplexNoise:
    """Tests for the positional noise strategy."""

    def test_range(self) -> None:
        noise = SimplexNoise(seed=3)
        values = [noise.noise2d(x * 0.37, y * 0.41) for x in range(60) for y in range(60)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        # Not degenerate
        assert max(values) - min(values) > 0.5

    def test_same_seed_same_values(self) -> None:
        a = SimplexNoise(seed=10)
        b = SimplexNoise(seed=10)
        for x, y in [(0.0, 0.0), (1.25, 3.5), (-4.2, 7.7), (100.1, 0.05)]:
            assert a.noise2d(x, y) == b.noise2d(x, y)

    def test_repeat_sample_is_stable(self) -> None:
        noise = SimplexNoise(seed=10)
        assert noise.noise2d(2.3, 4.5) == noise.noise2d(2.3, 4.5)

    def test_different_seeds_differ(self) -> None:
        a = SimplexNoise(seed=1)
        b = SimplexNoise(seed=2)
        points = [(x * 0.3, y * 0.3) for x in range(10) for y in range(10)]
        assert any(a.noise2d(x, y) != b.noise2d(x, y) for x, y in points)

    def test_nearby_samples_are_close(self) -> None:
        noise = SimplexNoise(seed=5)
        for i in range(50):
            x = i * 0.05
            assert abs(noise.noise2d(x, 1.0) - noise.noise2d(x + 0.01, 1.0)) < 0.2


class TestUniformNoise:
    """Tests for the degraded fallback."""

    def test_range(self, rng: Generator) -> None:
        noise = UniformNoise(rng)
        assert all(-1.0 <= noise.noise2d(0.0, 0.0) < 1.0 for _ in range(200))

    def test_not_positional(self, rng: Generator) -> None:
        noise = UniformNoise(rng)
        assert len({noise.noise2d(1.0, 1.0) for _ in range(10)}) > 1


class TestMakeNoise:
    """Tests for noise strategy selection."""

    def test_kinds(self, rng: Generator) -> None:
        assert isinstance(make_noise("simplex", rng), SimplexNoise)
        assert isinstance(make_noise("uniform", rng), UniformNoise)

    def test_simplex_seeded_from_rng(self) -> None:
        a = make_noise("simplex", np.random.default_rng(4))
        b = make_noise("simplex", np.random.default_rng(4))
        assert a.noise2d(3.3, 1.1) == b.noise2d(3.3, 1.1)

    def test_unknown_kind(self, rng: Generator) -> None:
        with pytest.raises(ValueError, match="unknown noise kind"):
            make_noise("perlin", rng)
