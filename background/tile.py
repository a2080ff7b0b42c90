"""
Background tile — one noisy, scanlined label tile for the staggered wallpaper.

Render order (each step works on the previous step's pixels):
  1. dark green fill
  2. label twice, first pass over a soft glow
  3. four-direction 1 px smear
  4. per-pixel noise, green channel weighted strongest
  5. scanlines every other row
"""
import logging
import math
import os
from typing import Optional, Tuple

import numpy as np

import background as B

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


def _alpha(fraction: float) -> int:
    return int(round(fraction * 255))


def sanitize_text(text) -> str:
    if text is None:
        return ''
    # SDL_ttf refuses embedded NULs
    return str(text).replace('\x00', '')


class TileGenerator:
    """Measures the label, sizes the tile and renders it off-screen."""

    def __init__(self, text: str = 'pemmyz', font: Optional[pygame.font.Font] = None,
                 rng: Optional[np.random.RandomState] = None):
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(B.FONT_NAMES, B.FONT_SIZE, bold=B.FONT_BOLD)
        self.font = font
        self.rng = rng if rng is not None else np.random.RandomState()
        self.text = ''
        self.surface: Optional[pygame.Surface] = None
        self.render_count = 0
        self.set_text(text)

    # Dimensions

    def measure(self, text: str) -> int:
        if not text:
            return 0
        return int(math.ceil(self.font.size(text)[0]))

    def tile_width(self, text: Optional[str] = None) -> int:
        text = self.text if text is None else sanitize_text(text)
        return max(B.TILE_MIN_WIDTH, self.measure(text) + B.TILE_PADDING)

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    @property
    def row_offset(self) -> int:
        return int(math.floor(self.width * B.ROW_STAGGER))

    def set_text(self, text: str):
        self.text = sanitize_text(text)
        self.update_dimensions()

    def update_dimensions(self):
        size = (self.tile_width(), B.TILE_HEIGHT)
        if self.surface is None or self.surface.get_size() != size:
            self.surface = pygame.Surface(size, 0, 32)
            logging.debug(f"Background tile resized to {size[0]}x{size[1]} for {self.text!r}")

    # Rendering

    def render(self) -> pygame.Surface:
        tile = self.surface
        tile.fill(B.BG_COLOR)
        if self.text.strip():
            self._draw_label(tile)
        self._smear(tile)
        self._add_noise(tile)
        self._scanlines(tile)
        self.render_count += 1
        return tile

    def _draw_label(self, tile: pygame.Surface):
        center = (tile.get_width() / 2, tile.get_height() / 2)

        glow = self._blurred(self.font.render(self.text, True, B.GLOW_COLOR))
        glow.set_alpha(_alpha(B.GLOW_ALPHA))
        tile.blit(glow, glow.get_rect(center=center))

        for color, alpha in ((B.TEXT_COLOR_1, B.TEXT_ALPHA_1),
                             (B.TEXT_COLOR_2, B.TEXT_ALPHA_2)):
            label = self.font.render(self.text, True, color)
            label.set_alpha(_alpha(alpha))
            tile.blit(label, label.get_rect(center=center))

    def _blurred(self, glyphs: pygame.Surface) -> pygame.Surface:
        """Cheap box-ish blur: pad, shrink, grow back."""
        pad = B.GLOW_BLUR
        w, h = glyphs.get_width() + 2 * pad, glyphs.get_height() + 2 * pad
        canvas = pygame.Surface((w, h), pygame.SRCALPHA)
        canvas.fill((0, 0, 0, 0))
        canvas.blit(glyphs, (pad, pad))
        factor = max(1, B.GLOW_BLUR // 2)
        small = pygame.transform.smoothscale(canvas, (max(1, w // factor), max(1, h // factor)))
        return pygame.transform.smoothscale(small, (w, h))

    def _smear(self, tile: pygame.Surface):
        # each pass composites the tile as left by the previous one
        for offset in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            ghost = tile.copy()
            ghost.set_alpha(_alpha(B.SMEAR_ALPHA))
            tile.blit(ghost, offset)

    def _add_noise(self, tile: pygame.Surface):
        pixels = pygame.surfarray.pixels3d(tile)
        noise = self.rng.uniform(-1.0, 1.0, size=pixels.shape[:2]) * B.NOISE_AMPLITUDE
        weights = np.asarray(B.NOISE_CHANNEL_WEIGHTS, dtype=np.float32)
        noisy = pixels.astype(np.float32) + noise[:, :, None] * weights
        pixels[...] = np.clip(noisy, 0, 255).astype(np.uint8)
        del pixels  # release the surface lock

    def _scanlines(self, tile: pygame.Surface):
        line = pygame.Surface((tile.get_width(), 1), 0, 32)
        line.fill((0, 0, 0))
        line.set_alpha(_alpha(B.SCANLINE_ALPHA))
        for y in range(0, tile.get_height(), B.SCANLINE_SPACING):
            tile.blit(line, (0, y))
