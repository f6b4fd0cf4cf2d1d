"""Config — load game parameters from YAML files.

Grid size, noise tuning, winner rules and display settings live in YAML
and are parsed into a typed dataclass here.  ``GameConfig`` turns itself
plus an asset manifest into the ``PopulationConfig`` the populator runs on.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from egghunt.grid.populator import PopulationConfig, WinnerPolicy

if TYPE_CHECKING:
    from egghunt.game.manifest import AssetManifest


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed; None draws fresh entropy for every game.
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        tile_size: Pixel size of one cell in world space.
        noise: Noise strategy name (``simplex`` or ``uniform``).
        noise_scale: Multiplier applied to cell coordinates before sampling.
        band_count: Number of background bands.
        collectible_band_limit: Bands below this hold an egg.
        decoration_probability: Per-cell chance of a foreground decoration.
        winner_margin: Cells kept clear of the golden egg threshold at each
            end; None derives it from ``winner_margin_fraction``.
        winner_margin_fraction: Margin as a share of the cell count.
        winner_policy: ``sentinel`` or ``reserve_last``.
        winner_category: Golden egg id for the sentinel policy.
        zoom: Initial camera zoom.
        pickup_sound: Manifest audio id played when an egg is picked up.
        win_sound: Manifest audio id played when the golden egg is found.
        manifest: Optional path to the asset manifest.
    """

    seed: int | None = None
    grid_width: int = 40
    grid_height: int = 40
    tile_size: int = 100
    noise: str = "simplex"
    noise_scale: float = 0.05
    band_count: int = 5
    collectible_band_limit: int = 3
    decoration_probability: float = 0.4
    winner_margin: int | None = None
    winner_margin_fraction: float = 0.0125
    winner_policy: str = "sentinel"
    winner_category: str = "golden_egg"
    zoom: float = 0.5
    pickup_sound: str = "audio01"
    win_sound: str = "audio02"
    manifest: Path | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        A relative ``manifest`` entry is resolved against the config file's
        directory.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        manifest = data.get("manifest")
        if manifest is not None:
            manifest = path.parent / manifest

        return cls(
            seed=data.get("seed", cls.seed),
            grid_width=data.get("grid_width", cls.grid_width),
            grid_height=data.get("grid_height", cls.grid_height),
            tile_size=data.get("tile_size", cls.tile_size),
            noise=data.get("noise", cls.noise),
            noise_scale=data.get("noise_scale", cls.noise_scale),
            band_count=data.get("band_count", cls.band_count),
            collectible_band_limit=data.get(
                "collectible_band_limit",
                cls.collectible_band_limit,
            ),
            decoration_probability=data.get(
                "decoration_probability",
                cls.decoration_probability,
            ),
            winner_margin=data.get("winner_margin", cls.winner_margin),
            winner_margin_fraction=data.get(
                "winner_margin_fraction",
                cls.winner_margin_fraction,
            ),
            winner_policy=data.get("winner_policy", cls.winner_policy),
            winner_category=data.get("winner_category", cls.winner_category),
            zoom=data.get("zoom", cls.zoom),
            pickup_sound=data.get("pickup_sound", cls.pickup_sound),
            win_sound=data.get("win_sound", cls.win_sound),
            manifest=manifest,
        )

    def to_population_config(self, manifest: AssetManifest) -> PopulationConfig:
        """Combine these settings with the manifest's catalogs.

        The manifest's ``golden`` entry, when present, replaces
        ``winner_category``.

        Raises:
            ValueError: If ``winner_policy`` is not a known policy.
        """
        return PopulationConfig(
            width=self.grid_width,
            height=self.grid_height,
            background_categories=manifest.background_ids,
            collectible_categories=manifest.egg_ids,
            winner_category=manifest.golden_id or self.winner_category,
            decoration_categories=manifest.decoration_ids,
            noise_scale=self.noise_scale,
            band_count=self.band_count,
            collectible_band_limit=self.collectible_band_limit,
            decoration_probability=self.decoration_probability,
            winner_margin=self.winner_margin,
            winner_margin_fraction=self.winner_margin_fraction,
            winner_policy=WinnerPolicy(self.winner_policy),
        )
