"""Pygame 2D front end for the egg hunt.

Renders the populated grid through a draggable camera and turns short
clicks into egg pickups.  Tiles use the manifest's images when they load
and fall back to a flat colour derived from the category id otherwise.
"""

from __future__ import annotations

import logging
import zlib
from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from egghunt.game.camera import Camera
    from egghunt.game.session import GameSession

from egghunt.game.session import ClickOutcome

logger = logging.getLogger(__name__)

# Colour palette
_BG = (0, 201, 71)
_TEXT = (0, 0, 0)
_TEXT_BG = (255, 255, 255)
_WIN_TEXT = (255, 255, 0)
_GOLD = (255, 215, 0)

# Pointer travel (pixels) beyond which a press counts as a drag, not a click
_DRAG_THRESHOLD = 5.0

_INSTRUCTIONS = ["Find the special egg!", "Click eggs to pickup.", "Drag to move around."]
_WIN_LINES = ["YOU FOUND THE GOLDEN EGG!", "TAKE A PICTURE AND", "SUBMIT FOR A PRIZE!"]


def category_colour(category: str) -> tuple[int, int, int]:
    """Stable flat colour for a category id."""
    h = zlib.crc32(category.encode("utf-8"))
    return (64 + (h & 0x7F), 64 + ((h >> 8) & 0x7F), 64 + ((h >> 16) & 0x7F))


def shift_pitch(samples: NDArray[np.generic], rate: float) -> NDArray[np.generic]:
    """Resample ``samples`` so they play back ``rate`` times faster.

    Works on mono ``(n,)`` and multi-channel ``(n, channels)`` arrays by
    picking the nearest source frame for each output frame.

    Args:
        samples: Sound frames as returned by ``pygame.sndarray.array``.
        rate: Playback rate; above 1 raises pitch and shortens the sound.

    Raises:
        ValueError: If ``rate`` is not positive.
    """
    if rate <= 0:
        msg = f"rate must be positive, got {rate}"
        raise ValueError(msg)
    frames = np.arange(0.0, len(samples), rate).astype(np.intp)
    return np.ascontiguousarray(samples[frames])


class PygameRenderer:
    """Renders a GameSession into a resizable Pygame window.

    Attributes:
        session: The game being played.
        camera: Viewport over the world.
        screen: The Pygame display surface.
    """

    def __init__(self, session: GameSession, camera: Camera) -> None:
        """Initialise the renderer.

        Args:
            session: The game session to render.
            camera: Camera sized to the initial window.
        """
        self.session = session
        self.camera = camera

        pygame.init()
        self.screen = pygame.display.set_mode(
            (int(camera.view_width), int(camera.view_height)),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption("Egg Hunt")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 30)
        self.big_font = pygame.font.SysFont("arial", 48, bold=True)
        self.running = True
        self._images: dict[tuple[str, int], pygame.Surface | None] = {}

        winner = session.population.winner
        self._golden = winner.collectible_category if winner is not None else None
        self._sounds = self._load_sounds()

    def _load_sounds(self) -> dict[str, pygame.mixer.Sound]:
        """Load every audio entry in the manifest that exists on disk."""
        sounds: dict[str, pygame.mixer.Sound] = {}
        if pygame.mixer.get_init() is None:
            logger.warning("No audio device available, playing without sound")
            return sounds
        for sound_id in self.session.manifest.audio_ids:
            path = self.session.manifest.resolve(sound_id)
            if path is None or not path.is_file():
                continue
            try:
                sounds[sound_id] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.warning("Could not load %s: %s", path, exc)
        return sounds

    def _play(self, sound_id: str, rate: float = 1.0) -> None:
        """Play a loaded sound, optionally at a different rate."""
        sound = self._sounds.get(sound_id)
        if sound is None:
            logger.debug("Sound %s not loaded", sound_id)
            return
        if rate != 1.0:
            sound = pygame.sndarray.make_sound(
                shift_pitch(pygame.sndarray.array(sound), rate),
            )
        sound.play()

    def run(self, fps: int = 60) -> None:
        """Main loop: handle events, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                self.camera.resize(*event.size)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.camera.start_drag(*event.pos)
            elif event.type == pygame.MOUSEMOTION:
                self.camera.drag_to(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if self.camera.dragging and self.camera.drag_distance < _DRAG_THRESHOLD:
                    self._click(*event.pos)
                self.camera.end_drag()
            elif event.type == pygame.WINDOWLEAVE:
                self.camera.end_drag()

    def _click(self, px: int, py: int) -> None:
        """Translate a screen click into a session pickup."""
        index = self.session.index_at_world(*self.camera.screen_to_world(px, py))
        if index is None:
            return
        outcome = self.session.collect(index)
        if outcome is ClickOutcome.IGNORED:
            return
        logger.debug("Click on cell %d: %s", index, outcome.name)
        config = self.session.config
        if outcome is ClickOutcome.WIN:
            self._play(config.win_sound)
        else:
            self._play(config.pickup_sound, self.session.pickup_pitch())

    def _image(self, category: str, size: int) -> pygame.Surface | None:
        """Load and cache the manifest image for ``category`` at ``size``."""
        key = (category, size)
        if key not in self._images:
            surface = None
            path = self.session.manifest.resolve(category)
            if path is not None and path.is_file():
                try:
                    raw = pygame.image.load(str(path)).convert_alpha()
                    surface = pygame.transform.smoothscale(raw, (size, size))
                except pygame.error as exc:
                    logger.warning("Could not load %s: %s", path, exc)
            self._images[key] = surface
        return self._images[key]

    def _blit_tile(self, category: str, rect: pygame.Rect, *, inset: int = 0) -> None:
        inner = rect.inflate(-2 * inset, -2 * inset)
        image = self._image(category, max(1, inner.width))
        if image is not None:
            self.screen.blit(image, inner.topleft)
            return
        if category == self._golden:
            colour = _GOLD
        else:
            colour = category_colour(category)
        if inset:
            pygame.draw.ellipse(self.screen, colour, inner)
        else:
            pygame.draw.rect(self.screen, colour, inner)

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_grid()
        self._draw_ui()
        if self.session.won:
            self._draw_win_banner()
        pygame.display.flip()

    def _draw_grid(self) -> None:
        """Draw backgrounds, decorations and eggs for on-screen cells."""
        cam = self.camera
        ts = self.session.config.tile_size
        population = self.session.population
        size = max(1, round(ts * cam.zoom))

        right, bottom = cam.screen_to_world(cam.view_width, cam.view_height)
        col_lo = max(0, int(cam.scroll_x // ts))
        row_lo = max(0, int(cam.scroll_y // ts))
        col_hi = min(population.width, int(right // ts) + 1)
        row_hi = min(population.height, int(bottom // ts) + 1)

        for row in range(row_lo, row_hi):
            for col in range(col_lo, col_hi):
                cell = population.cell_at(col, row)
                sx, sy = cam.world_to_screen(col * ts, row * ts)
                rect = pygame.Rect(round(sx), round(sy), size, size)

                self._blit_tile(cell.background_category, rect)
                egg = self.session.egg_category(cell.index)
                if egg is not None:
                    self._blit_tile(egg, rect, inset=size // 6)
                if cell.decoration_category is not None:
                    self._blit_tile(cell.decoration_category, rect, inset=size // 3)

    def _draw_ui(self) -> None:
        """Draw the instructions and the egg counter."""
        w, h = self.screen.get_size()
        counter = self.font.render(
            f"Eggs Collected {self.session.eggs_collected}",
            True,
            _TEXT,
            _TEXT_BG,
        )
        self.screen.blit(counter, (10, h - counter.get_height() - 10))

        y = h - 10
        for line in reversed(_INSTRUCTIONS):
            surf = self.font.render(line, True, _TEXT, _TEXT_BG)
            y -= surf.get_height()
            self.screen.blit(surf, (w - surf.get_width() - 10, y))

    def _draw_win_banner(self) -> None:
        w, h = self.screen.get_size()
        banner = pygame.Surface((800, 200), pygame.SRCALPHA)
        banner.fill((0, 0, 0, 128))
        self.screen.blit(banner, (w // 2 - 400, h // 2 - 100))

        y = h // 2 - 80
        for line in _WIN_LINES:
            surf = self.big_font.render(line, True, _WIN_TEXT)
            self.screen.blit(surf, (w // 2 - surf.get_width() // 2, y))
            y += surf.get_height()
