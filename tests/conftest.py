"""Shared fixtures for the Egg Hunt test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from egghunt.game.config import GameConfig
from egghunt.game.manifest import AssetManifest
from egghunt.grid.populator import PopulationConfig

BACKGROUNDS = ("water", "meadow", "grass", "dirt", "path")
EGGS = ("egg_blue", "egg_pink", "egg_striped")
DECORATIONS = ("flowers", "tuft")


class TableNoise:
    """Noise that returns a fixed band per cell, for hand-built layouts.

    Expects ``noise_scale=1.0`` so samples arrive at integer ``(col, row)``.
    """

    def __init__(self, bands: list[int], width: int, band_count: int = 5) -> None:
        self.bands = bands
        self.width = width
        self.band_count = band_count
        self.calls = 0

    def noise2d(self, x: float, y: float) -> float:
        self.calls += 1
        band = self.bands[int(y) * self.width + int(x)]
        # Centre of the band, mapped back from [0, 1] to [-1, 1]
        return (band + 0.5) / self.band_count * 2.0 - 1.0


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def grid_config() -> PopulationConfig:
    """A 40x40 grid with the reference tuning values."""
    return PopulationConfig(
        width=40,
        height=40,
        background_categories=BACKGROUNDS,
        collectible_categories=EGGS,
        winner_category="golden_egg",
        decoration_categories=DECORATIONS,
    )


@pytest.fixture
def table_config() -> PopulationConfig:
    """A 4x4 grid meant to be driven by ``TableNoise``."""
    return PopulationConfig(
        width=4,
        height=4,
        background_categories=BACKGROUNDS,
        collectible_categories=EGGS,
        winner_category="golden_egg",
        decoration_categories=DECORATIONS,
        noise_scale=1.0,
        winner_margin=1,
    )


@pytest.fixture
def small_game_config() -> GameConfig:
    """A 10x10 game where every cell holds an egg."""
    return GameConfig(
        seed=7,
        grid_width=10,
        grid_height=10,
        collectible_band_limit=5,
    )


@pytest.fixture
def placeholder_manifest() -> AssetManifest:
    """Colour-only catalogs (no files needed)."""
    return AssetManifest.placeholder(band_count=5)
