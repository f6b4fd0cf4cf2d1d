"""Entry point for ``python -m egghunt``.

Loads the default YAML config and asset manifest, populates a new egg
hunt, and opens a Pygame window to play it (or prints the map with
``--headless``).
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from egghunt.game.camera import Camera
from egghunt.game.config import GameConfig
from egghunt.game.manifest import AssetManifest
from egghunt.game.session import GameSession

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def load_manifest(config: GameConfig) -> AssetManifest:
    """Load the configured manifest, or placeholders if there is none."""
    if config.manifest is not None:
        try:
            return AssetManifest.from_file(config.manifest)
        except FileNotFoundError:
            logger.warning("Manifest %s not found, using default eggs", config.manifest)
    return AssetManifest.placeholder(config.band_count)


def render_ascii(session: GameSession) -> str:
    """Draw the grid as text: band digits, ``o`` for eggs, ``*`` for gold."""
    rows: list[str] = []
    population = session.population
    for row in range(population.height):
        line = []
        for col in range(population.width):
            cell = population.cell_at(col, row)
            if cell.is_winner:
                line.append("*")
            elif cell.has_collectible:
                line.append("o")
            else:
                line.append(str(cell.band))
        rows.append("".join(line))
    return "\n".join(rows)


def main() -> None:
    """Parse CLI args, create the session, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="egghunt",
        description="Egg Hunt - find the golden egg",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--manifest",
        type=pathlib.Path,
        default=None,
        help="Asset manifest overriding the one named in the config",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed overriding the config (default: config value)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1280,
        help="Window width in pixels (default: 1280)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=720,
        help="Window height in pixels (default: 720)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the populated map instead of opening a window",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig.from_yaml(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)
    if args.manifest is not None:
        config = dataclasses.replace(config, manifest=args.manifest)

    session = GameSession(config=config, manifest=load_manifest(config))

    if args.headless:
        print(render_ascii(session))
        return

    from egghunt.ui.pygame_client import PygameRenderer

    world_w, world_h = session.world_size
    camera = Camera(
        world_width=world_w,
        world_height=world_h,
        view_width=args.width,
        view_height=args.height,
        zoom=config.zoom,
    )
    PygameRenderer(session=session, camera=camera).run()


if __name__ == "__main__":
    main()
