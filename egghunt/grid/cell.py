"""Cell — coordinates and per-cell population results.

A grid is addressed by a flat row-major index.  ``Cell`` converts between
the flat index and ``(col, row)``; ``GridCellResult`` is the plain record
the populator emits for every cell so that render layers never need to
re-derive category choices.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cell:
    """A position in a row-major grid.

    Attributes:
        index: Flat index, ``row * width + col``.
        col: Column position.
        row: Row position.
    """

    index: int
    col: int
    row: int

    @classmethod
    def from_index(cls, index: int, width: int) -> Cell:
        """Build a cell from its flat index.

        Raises:
            IndexError: If ``index`` is negative.
        """
        if index < 0:
            msg = f"cell index {index} is negative"
            raise IndexError(msg)
        return cls(index=index, col=index % width, row=index // width)

    @classmethod
    def from_position(cls, col: int, row: int, width: int) -> Cell:
        """Build a cell from ``(col, row)``."""
        return cls(index=row * width + col, col=col, row=row)


@dataclass(frozen=True)
class GridCellResult:
    """Everything the populator decided for one cell.

    Attributes:
        index: Flat cell index.
        col: Column position.
        row: Row position.
        band: Noise band the cell fell into.
        background_category: Background id for the band.
        collectible_category: Egg id, or None for decorative-only cells.
        is_winner: Whether this cell holds the golden egg.
        decoration_category: Foreground overlay id, or None.
    """

    index: int
    col: int
    row: int
    band: int
    background_category: str
    collectible_category: str | None = None
    is_winner: bool = False
    decoration_category: str | None = None

    @property
    def has_collectible(self) -> bool:
        return self.collectible_category is not None
