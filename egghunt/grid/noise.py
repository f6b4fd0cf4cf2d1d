"""Noise sources used to pick background bands.

Two interchangeable strategies sit behind ``NoiseSource``:

- ``SimplexNoise``: positional 2D simplex noise, so neighbouring cells
  share smooth, terrain-like bands.
- ``UniformNoise``: the degraded mode: an independent uniform draw per
  sample.  Output keeps the same range but loses all spatial coherence.

The caller chooses which one to hand to the populator; the populator never
falls back on its own.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from numpy.random import Generator

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

_GRADIENTS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
)

NOISE_KINDS = ("simplex", "uniform")


class NoiseSource(Protocol):
    """Anything that can sample a value in ``[-1, 1]`` at ``(x, y)``."""

    def noise2d(self, x: float, y: float) -> float: ...


class SimplexNoise:
    """2D simplex noise over a seeded permutation table.

    Attributes:
        seed: Seed used to shuffle the permutation table.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        table = np.random.default_rng(seed).permutation(256)
        self._perm: list[int] = np.concatenate([table, table]).tolist()

    def _corner(self, gi: int, x: float, y: float) -> float:
        t = 0.5 - x * x - y * y
        if t < 0:
            return 0.0
        gx, gy = _GRADIENTS[gi % len(_GRADIENTS)]
        t *= t
        return t * t * (gx * x + gy * y)

    def noise2d(self, x: float, y: float) -> float:
        """Sample noise at ``(x, y)``.

        Returns:
            A value in ``[-1, 1]``; identical inputs give identical output.
        """
        perm = self._perm

        # Skew into simplex space to find the containing cell
        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        i1, j1 = (1, 0) if x0 > y0 else (0, 1)

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        n0 = self._corner(perm[ii + perm[jj]], x0, y0)
        n1 = self._corner(perm[ii + i1 + perm[jj + j1]], x1, y1)
        n2 = self._corner(perm[ii + 1 + perm[jj + 1]], x2, y2)

        value = 70.0 * (n0 + n1 + n2)
        return max(-1.0, min(1.0, value))


class UniformNoise:
    """Non-positional fallback: every sample is a fresh uniform draw.

    Attributes:
        rng: Random generator consumed once per sample.
    """

    def __init__(self, rng: Generator) -> None:
        self.rng = rng

    def noise2d(self, x: float, y: float) -> float:
        return float(self.rng.uniform(-1.0, 1.0))


def make_noise(kind: str, rng: Generator) -> NoiseSource:
    """Build the noise strategy named ``kind``.

    Args:
        kind: ``"simplex"`` or ``"uniform"``.
        rng: Generator used to seed simplex noise, or sampled directly
            by the uniform fallback.

    Raises:
        ValueError: If ``kind`` is not a known strategy.
    """
    if kind == "simplex":
        return SimplexNoise(seed=int(rng.integers(0, 2**32)))
    if kind == "uniform":
        return UniformNoise(rng)
    msg = f"unknown noise kind {kind!r}; expected one of {NOISE_KINDS}"
    raise ValueError(msg)
