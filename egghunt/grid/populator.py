"""Populator — assign backgrounds, eggs and the golden egg to a grid.

One forward pass over every cell in index order:

1. Sample noise at the scaled ``(col, row)`` and bucket it into a band.
2. The band picks the background category.
3. Low bands hold an egg.  The first egg at or after the winner threshold
   becomes the golden egg; every other egg gets a random regular category.
4. Independently, a cell may receive a foreground decoration.

The pass is a fold over an explicit ``_WinnerState`` accumulator, so the
function touches nothing outside its arguments apart from drawing from the
supplied noise source and random generator.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, overload

from egghunt.grid.cell import Cell, GridCellResult
from egghunt.grid.errors import (
    CatalogTooSmall,
    InvalidConfiguration,
    MissingCollectibleCatalog,
)

if TYPE_CHECKING:
    from numpy.random import Generator

    from egghunt.grid.noise import NoiseSource

logger = logging.getLogger(__name__)


class WinnerPolicy(Enum):
    """How the golden egg's category relates to the regular egg catalog."""

    # Dedicated winner id; regular eggs draw from the whole catalog
    SENTINEL = "sentinel"
    # Last catalog entry is the winner; regular eggs never draw it
    RESERVE_LAST = "reserve_last"


@dataclass
class PopulationConfig:
    """Inputs for a single population run.

    Attributes:
        width: Number of grid columns.
        height: Number of grid rows.
        background_categories: Background ids indexed directly by band.
        collectible_categories: Regular egg ids.
        winner_category: Golden egg id (used by ``WinnerPolicy.SENTINEL``).
        decoration_categories: Foreground overlay ids; may be empty.
        noise_scale: Multiplier applied to ``(col, row)`` before sampling.
        band_count: Number of bands the normalised noise is split into.
        collectible_band_limit: Bands strictly below this hold an egg.
        decoration_probability: Per-cell chance of a decoration.
        winner_margin: Cells excluded at both ends when drawing the
            threshold.  ``None`` derives it from ``winner_margin_fraction``.
        winner_margin_fraction: Margin as a share of the cell count.
        winner_policy: Which golden egg category rule applies.
    """

    width: int
    height: int
    background_categories: Sequence[str]
    collectible_categories: Sequence[str]
    winner_category: str | None = None
    decoration_categories: Sequence[str] = field(default_factory=tuple)
    noise_scale: float = 0.05
    band_count: int = 5
    collectible_band_limit: int = 3
    decoration_probability: float = 0.4
    winner_margin: int | None = None
    winner_margin_fraction: float = 0.0125
    winner_policy: WinnerPolicy = WinnerPolicy.SENTINEL

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def resolved_margin(self) -> int:
        """Return the winner margin for this grid size."""
        if self.winner_margin is not None:
            return self.winner_margin
        return round(self.cell_count * self.winner_margin_fraction)

    def regular_categories(self) -> Sequence[str]:
        """Return the ids a regular (non-golden) egg may be drawn from.

        Under ``RESERVE_LAST`` the last entry is held back, unless it is the
        only one.  Under ``SENTINEL`` the winner category is never a regular
        pick, even when the catalog lists it.
        """
        catalog = self.collectible_categories
        if self.winner_policy is WinnerPolicy.RESERVE_LAST:
            return catalog[:-1] if len(catalog) >= 2 else catalog
        return tuple(c for c in catalog if c != self.winner_category)

    def golden_category(self) -> str:
        """Return the category id the golden egg always shows."""
        if self.winner_policy is WinnerPolicy.RESERVE_LAST:
            if not self.collectible_categories:
                msg = "reserve_last policy needs at least one collectible category"
                raise MissingCollectibleCatalog(msg)
            return self.collectible_categories[-1]
        if self.winner_category is None:
            msg = "sentinel policy needs a winner_category"
            raise InvalidConfiguration(msg)
        return self.winner_category

    def validate(self) -> None:
        """Check everything that can be checked before the pass.

        Raises:
            InvalidConfiguration: On impossible dimensions or probabilities.
            CatalogTooSmall: If a band has no background category.
        """
        if self.width <= 0 or self.height <= 0:
            msg = f"grid must be at least 1x1, got {self.width}x{self.height}"
            raise InvalidConfiguration(msg)
        if self.band_count < 1:
            msg = f"band_count must be positive, got {self.band_count}"
            raise InvalidConfiguration(msg)
        if self.collectible_band_limit < 0:
            msg = (
                "collectible_band_limit must not be negative, "
                f"got {self.collectible_band_limit}"
            )
            raise InvalidConfiguration(msg)
        if not 0.0 <= self.decoration_probability <= 1.0:
            msg = (
                "decoration_probability must lie in [0, 1], "
                f"got {self.decoration_probability}"
            )
            raise InvalidConfiguration(msg)
        if self.winner_margin is not None and self.winner_margin < 0:
            msg = f"winner_margin must not be negative, got {self.winner_margin}"
            raise InvalidConfiguration(msg)
        if self.winner_policy is WinnerPolicy.SENTINEL and self.winner_category is None:
            msg = "sentinel policy needs a winner_category"
            raise InvalidConfiguration(msg)
        if len(self.background_categories) < self.band_count:
            msg = (
                f"{len(self.background_categories)} background categories "
                f"cannot cover {self.band_count} bands"
            )
            raise CatalogTooSmall(msg)


@dataclass(frozen=True)
class _WinnerState:
    placed: bool = False
    winner_index: int | None = None


@dataclass(frozen=True)
class Population(Sequence[GridCellResult]):
    """The ordered result of one population run.

    Attributes:
        width: Grid columns the run covered.
        height: Grid rows the run covered.
        cells: One result per cell, in index order.
        drawn_threshold: Threshold the winner search started from.
        winner_index: Realised golden egg index, or None if none was placed.
    """

    width: int
    height: int
    cells: tuple[GridCellResult, ...]
    drawn_threshold: int
    winner_index: int | None

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[GridCellResult]:
        return iter(self.cells)

    @overload
    def __getitem__(self, index: int) -> GridCellResult: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[GridCellResult]: ...

    def __getitem__(
        self,
        index: int | slice,
    ) -> GridCellResult | Sequence[GridCellResult]:
        return self.cells[index]

    @property
    def winner(self) -> GridCellResult | None:
        if self.winner_index is None:
            return None
        return self.cells[self.winner_index]

    def eligible_indices(self) -> list[int]:
        """Return the indices of every cell holding an egg."""
        return [c.index for c in self.cells if c.has_collectible]

    def cell_at(self, col: int, row: int) -> GridCellResult:
        """Return the result at ``(col, row)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not (0 <= col < self.width and 0 <= row < self.height):
            msg = f"({col}, {row}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[row * self.width + col]


def draw_winner_threshold(cell_count: int, margin: int, rng: Generator) -> int:
    """Draw the index the golden egg search starts from.

    The result lies in ``[margin, cell_count - margin)``.

    Raises:
        InvalidConfiguration: If the margins leave no cells to draw from.
    """
    span = cell_count - 2 * margin
    if span <= 0:
        msg = f"margin {margin} leaves no cells in a grid of {cell_count}"
        raise InvalidConfiguration(msg)
    return margin + math.floor(rng.random() * span)


def band_for(value: float, band_count: int) -> int:
    """Map a noise sample in ``[-1, 1]`` to a band in ``[0, band_count)``."""
    normalised = (value + 1.0) * 0.5
    band = math.floor(normalised * band_count)
    return min(max(band, 0), band_count - 1)


def _pick(catalog: Sequence[str], rng: Generator) -> str:
    return catalog[math.floor(rng.random() * len(catalog))]


def populate(
    config: PopulationConfig,
    noise: NoiseSource,
    rng: Generator,
    *,
    winner_threshold: int | None = None,
) -> Population:
    """Compute background, egg and golden egg assignment for every cell.

    Args:
        config: Grid dimensions, catalogs and tuning values.
        noise: Positional (or fallback) noise strategy.
        rng: Random generator for the threshold, egg and decoration picks.
        winner_threshold: Use this threshold instead of drawing one.

    Returns:
        A ``Population`` with exactly one result per cell in index order.

    Raises:
        InvalidConfiguration: On bad dimensions, probability or margins.
        CatalogTooSmall: If backgrounds cannot cover every band.
        MissingCollectibleCatalog: If an egg cell has no category to use.
    """
    config.validate()
    cell_count = config.cell_count

    if winner_threshold is None:
        winner_threshold = draw_winner_threshold(
            cell_count,
            config.resolved_margin(),
            rng,
        )
    elif not 0 <= winner_threshold < cell_count:
        msg = f"winner_threshold {winner_threshold} outside 0..{cell_count - 1}"
        raise InvalidConfiguration(msg)
    logger.debug(
        "Populating %dx%d grid, winner threshold %d",
        config.width,
        config.height,
        winner_threshold,
    )

    regular = config.regular_categories()
    decorations = config.decoration_categories

    state = _WinnerState()
    results: list[GridCellResult] = []
    for index in range(cell_count):
        cell = Cell.from_index(index, config.width)
        value = noise.noise2d(
            cell.col * config.noise_scale,
            cell.row * config.noise_scale,
        )
        band = band_for(value, config.band_count)
        background = config.background_categories[band]

        collectible: str | None = None
        is_winner = False
        if band < config.collectible_band_limit:
            if not regular:
                msg = f"cell {index} holds an egg but no collectible categories exist"
                raise MissingCollectibleCatalog(msg)
            collectible = _pick(regular, rng)
            if not state.placed and index >= winner_threshold:
                state = _WinnerState(placed=True, winner_index=index)
                is_winner = True
                collectible = config.golden_category()

        decoration: str | None = None
        if rng.random() < config.decoration_probability and decorations:
            decoration = _pick(decorations, rng)

        results.append(
            GridCellResult(
                index=index,
                col=cell.col,
                row=cell.row,
                band=band,
                background_category=background,
                collectible_category=collectible,
                is_winner=is_winner,
                decoration_category=decoration,
            ),
        )

    if state.winner_index is None:
        logger.warning(
            "No egg at or after index %d; grid has no golden egg",
            winner_threshold,
        )
    else:
        logger.debug("Golden egg placed at index %d", state.winner_index)

    return Population(
        width=config.width,
        height=config.height,
        cells=tuple(results),
        drawn_threshold=winner_threshold,
        winner_index=state.winner_index,
    )
