"""GameSession — one egg hunt from population to golden egg.

Owns the state of a single game:

1. Build the RNG and the noise strategy from config.
2. Populate the grid exactly once.
3. Track which eggs were picked up and whether the golden egg was found.

Nothing here draws or plays sound; the render layer asks the session what
happened and presents it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

import numpy as np
from numpy.random import Generator

from egghunt.grid.noise import NoiseSource, make_noise
from egghunt.grid.populator import Population, PopulationConfig, populate

if TYPE_CHECKING:
    from egghunt.game.config import GameConfig
    from egghunt.game.manifest import AssetManifest

logger = logging.getLogger(__name__)


class ClickOutcome(Enum):
    """What clicking a cell did."""

    IGNORED = auto()
    PICKUP = auto()
    WIN = auto()


@dataclass
class GameSession:
    """Drives a single game.

    Attributes:
        config: Loaded game configuration.
        manifest: Asset catalogs the grid is populated from.
        rng: Seeded random generator shared by noise and population.
        noise: Noise strategy chosen by ``config.noise``.
        population_config: Catalogs and tuning the grid was built from.
        population: The populated grid.
        collected: Indices of eggs picked up so far.
        eggs_collected: Click counter shown to the player.
        won: Whether the golden egg has been found.
    """

    config: GameConfig
    manifest: AssetManifest
    rng: Generator = field(init=False)
    noise: NoiseSource = field(init=False)
    population_config: PopulationConfig = field(init=False)
    population: Population = field(init=False)
    collected: set[int] = field(init=False, default_factory=set)
    eggs_collected: int = 0
    won: bool = False

    def __post_init__(self) -> None:
        """Build RNG and noise, then populate the grid."""
        self.rng = np.random.default_rng(self.config.seed)
        self.noise = make_noise(self.config.noise, self.rng)
        self.population_config = self.config.to_population_config(self.manifest)
        self.population = populate(self.population_config, self.noise, self.rng)
        logger.info(
            "New %dx%d egg hunt with %d eggs (golden egg at %s)",
            self.population.width,
            self.population.height,
            len(self.population.eligible_indices()),
            self.population.winner_index,
        )

    @property
    def world_size(self) -> tuple[int, int]:
        """World dimensions in pixels."""
        ts = self.config.tile_size
        return (self.population.width * ts, self.population.height * ts)

    def is_egg_visible(self, index: int) -> bool:
        """Return True if the cell shows an egg that has not been picked up."""
        return self.population[index].has_collectible and index not in self.collected

    def egg_category(self, index: int) -> str | None:
        """Category to draw for the egg at ``index``, or None if hidden.

        The golden egg wears a regular egg's look until it has been clicked.
        """
        if not self.is_egg_visible(index):
            return None
        cell = self.population[index]
        if cell.is_winner and not self.won:
            regular = self.population_config.regular_categories()
            return regular[index % len(regular)]
        return cell.collectible_category

    def index_at_world(self, x: float, y: float) -> int | None:
        """Return the cell index under world pixel ``(x, y)``, if any."""
        ts = self.config.tile_size
        col = int(x // ts)
        row = int(y // ts)
        if not (0 <= col < self.population.width and 0 <= row < self.population.height):
            return None
        return row * self.population.width + col

    def collect(self, index: int) -> ClickOutcome:
        """Handle a click on the egg at ``index``.

        Every click on a visible egg bumps the counter.  Regular eggs
        disappear; the golden egg stays visible and keeps answering ``WIN``,
        so clicking it again counts again.

        Args:
            index: Flat cell index that was clicked.

        Returns:
            What the click did.
        """
        if not self.is_egg_visible(index):
            return ClickOutcome.IGNORED

        self.eggs_collected += 1
        if index == self.population.winner_index:
            if not self.won:
                self.won = True
                logger.info(
                    "Golden egg found at index %d after %d eggs",
                    index,
                    self.eggs_collected,
                )
            return ClickOutcome.WIN

        self.collected.add(index)
        return ClickOutcome.PICKUP

    def pickup_pitch(self) -> float:
        """Random playback rate for the pickup sound, in ``[0.8, 1.2)``."""
        return 0.8 + float(self.rng.random()) * 0.4
