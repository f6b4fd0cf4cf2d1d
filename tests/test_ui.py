"""Smoke tests for the UI and CLI modules (no display required)."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from egghunt.game.config import GameConfig
from egghunt.game.manifest import AssetManifest
from egghunt.game.session import GameSession
from egghunt.ui.pygame_client import PygameRenderer, category_colour, shift_pitch


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_category_colour_is_stable() -> None:
    assert category_colour("egg_blue") == category_colour("egg_blue")
    assert all(64 <= c < 192 for c in category_colour("meadow"))


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from egghunt.__main__ import main

    assert callable(main)


def test_load_manifest_falls_back(tmp_path: Path) -> None:
    from egghunt.__main__ import load_manifest

    config = GameConfig(manifest=tmp_path / "missing.json")
    manifest = load_manifest(config)
    assert manifest.background_ids == AssetManifest.placeholder().background_ids


def test_render_ascii(small_game_config: GameConfig) -> None:
    from egghunt.__main__ import render_ascii

    session = GameSession(config=small_game_config, manifest=AssetManifest.placeholder())
    rows = render_ascii(session).splitlines()
    assert len(rows) == 10
    assert all(len(row) == 10 for row in rows)
    assert "".join(rows).count("*") == 1


class TestShiftPitch:
    """Tests for the pickup sound resampler."""

    def test_faster_rate_shortens(self) -> None:
        samples = np.arange(100, dtype=np.int16)
        shifted = shift_pitch(samples, 1.25)
        assert len(shifted) == 80
        assert shifted.dtype == np.int16
        assert shifted[0] == 0

    def test_slower_rate_lengthens(self) -> None:
        samples = np.arange(100, dtype=np.int16)
        assert len(shift_pitch(samples, 0.8)) == 125

    def test_unit_rate_is_identity(self) -> None:
        samples = np.arange(20, dtype=np.int16).reshape(10, 2)
        assert np.array_equal(shift_pitch(samples, 1.0), samples)

    def test_keeps_channels(self) -> None:
        stereo = np.zeros((100, 2), dtype=np.int16)
        assert shift_pitch(stereo, 1.2).shape[1] == 2

    def test_bad_rate(self) -> None:
        with pytest.raises(ValueError):
            shift_pitch(np.zeros(10, dtype=np.int16), 0.0)
