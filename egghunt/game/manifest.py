"""AssetManifest — the id/path/type list describing game assets.

The manifest is a JSON (or YAML) document of the form::

    images:
      - {id: grass01, path: assets/grass01.png, type: env}
      - {id: egg01, path: assets/egg01.png, type: egg}

Entry types sort ids into the catalogs the populator needs:

- ``env``: background tiles, indexed by noise band
- ``egg``: regular eggs
- ``golden``: the dedicated golden egg id
- ``fg``: foreground decorations
- ``audio``: sound effects

Remote (``http``) paths are ignored; only local assets are loaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ASSET_TYPES = ("env", "egg", "golden", "fg", "audio")


@dataclass(frozen=True)
class AssetEntry:
    """A single manifest line.

    Attributes:
        asset_id: Category / texture key.
        path: Asset location, relative to the manifest file.
        asset_type: One of ``ASSET_TYPES``; unknown types are kept but unused.
    """

    asset_id: str
    path: str
    asset_type: str

    @property
    def is_remote(self) -> bool:
        return self.path.startswith("http")


@dataclass
class AssetManifest:
    """Asset catalogs grouped by type.

    Attributes:
        entries: Every local entry, in file order.
        base_dir: Directory asset paths are resolved against.
    """

    entries: list[AssetEntry] = field(default_factory=list)
    base_dir: Path = field(default_factory=Path)

    def ids_of(self, asset_type: str) -> list[str]:
        """Return ids of the given type in manifest order."""
        return [e.asset_id for e in self.entries if e.asset_type == asset_type]

    @property
    def background_ids(self) -> list[str]:
        return self.ids_of("env")

    @property
    def egg_ids(self) -> list[str]:
        return self.ids_of("egg")

    @property
    def decoration_ids(self) -> list[str]:
        return self.ids_of("fg")

    @property
    def audio_ids(self) -> list[str]:
        return self.ids_of("audio")

    @property
    def golden_id(self) -> str | None:
        golden = self.ids_of("golden")
        return golden[0] if golden else None

    def resolve(self, asset_id: str) -> Path | None:
        """Return the on-disk path for ``asset_id``, or None if unknown."""
        for entry in self.entries:
            if entry.asset_id == asset_id:
                return self.base_dir / entry.path
        return None

    @classmethod
    def from_file(cls, path: str | Path) -> AssetManifest:
        """Load a manifest from a JSON or YAML file.

        Args:
            path: Path to the manifest.

        Returns:
            The parsed manifest with remote entries dropped.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ValueError: If an entry lacks an ``id`` or ``path``.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        entries: list[AssetEntry] = []
        for raw in data.get("images", []):
            if "id" not in raw or "path" not in raw:
                msg = f"manifest entry {raw!r} in {path} needs 'id' and 'path'"
                raise ValueError(msg)
            entry = AssetEntry(
                asset_id=str(raw["id"]),
                path=str(raw["path"]),
                asset_type=str(raw.get("type", "")),
            )
            if entry.is_remote:
                logger.debug("Skipping remote asset %s", entry.path)
                continue
            if entry.asset_type not in ASSET_TYPES:
                logger.debug("Asset %s has unused type %r", entry.asset_id, entry.asset_type)
            entries.append(entry)

        logger.info("Loaded %d assets from %s", len(entries), path)
        return cls(entries=entries, base_dir=path.parent)

    @classmethod
    def placeholder(cls, band_count: int = 5) -> AssetManifest:
        """Build a manifest of colour-only ids for running without assets.

        Args:
            band_count: Number of background ids to generate.
        """
        entries = [
            AssetEntry(asset_id=f"env{i:02d}", path="", asset_type="env")
            for i in range(band_count)
        ]
        entries += [
            AssetEntry(asset_id=f"egg{i:02d}", path="", asset_type="egg")
            for i in range(4)
        ]
        entries += [
            AssetEntry(asset_id="golden_egg", path="", asset_type="golden"),
            AssetEntry(asset_id="flowers", path="", asset_type="fg"),
            AssetEntry(asset_id="tuft", path="", asset_type="fg"),
        ]
        return cls(entries=entries)
