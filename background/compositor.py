"""
Staggered tiling of the background tile across the whole canvas.

Static mode renders the tile once, keeps a copy and only re-tiles when the
text or the canvas changes. Animated mode regenerates the tile (fresh noise)
and re-tiles every frame from a cancellable frame task.
"""
import logging
import math
from typing import Iterator, Optional, Tuple

import pygame

import background as B
from background.tile import TileGenerator
from physics.scheduler import FrameScheduler, FrameTask


def grid_counts(canvas_w: int, canvas_h: int, tile_w: int, tile_h: int) -> Tuple[int, int]:
    """(rows, cols) with one spare row and two spare columns for the stagger."""
    if tile_w < 1 or tile_h < 1:
        raise ValueError(f"Tile must be at least 1x1, got {tile_w}x{tile_h}")
    rows = math.ceil(canvas_h / tile_h) + 1
    cols = math.ceil(canvas_w / tile_w) + 2
    return rows, cols


def tile_origins(canvas_w: int, canvas_h: int, tile_w: int, tile_h: int,
                 row_offset: Optional[int] = None) -> Iterator[Tuple[int, int]]:
    """Top-left corner of every tile copy; odd rows shift left by `row_offset`."""
    if row_offset is None:
        row_offset = int(math.floor(tile_w * B.ROW_STAGGER))
    rows, cols = grid_counts(canvas_w, canvas_h, tile_w, tile_h)
    for r in range(rows):
        y = r * tile_h
        offset = 0 if r % 2 == 0 else -row_offset
        for c in range(cols):
            yield c * tile_w + offset, y


class BackgroundCompositor:

    def __init__(self, surface: pygame.Surface, generator: TileGenerator,
                 scheduler: FrameScheduler, animated: bool = False):
        self.surface = surface
        self.generator = generator
        self.animated = animated
        self.cached: Optional[pygame.Surface] = None
        self.task = FrameTask(scheduler, self._animate, name='background')
        self.draws = 0

    def draw_tiling(self, tile: pygame.Surface):
        w, h = self.surface.get_size()
        tw, th = tile.get_size()
        self.surface.fill(B.BG_COLOR)
        for x, y in tile_origins(w, h, tw, th, self.generator.row_offset):
            self.surface.blit(tile, (x, y))
        self.draws += 1

    def start(self):
        """Cancel any running animation, then draw in the current mode."""
        self.task.cancel()
        self.generator.update_dimensions()
        if self.animated:
            self.cached = None
            self._animate(0.0)
            self.task.start()
        else:
            self.render_static()

    def render_static(self):
        self.cached = self.generator.render().copy()
        self.draw_tiling(self.cached)

    def _animate(self, now: float):
        self.draw_tiling(self.generator.render())

    def set_text(self, text: str):
        self.generator.set_text(text)
        self.start()

    def set_animated(self, animated: bool):
        self.animated = bool(animated)
        self.start()

    def toggle_animation(self) -> bool:
        self.set_animated(not self.animated)
        logging.info(f"Background noise {'animated' if self.animated else 'static'}")
        return self.animated

    def resize(self, surface: pygame.Surface):
        self.surface = surface
        if not self.animated and self.cached is not None:
            self.draw_tiling(self.cached)
        elif not self.animated:
            self.render_static()

    def stop(self):
        self.task.cancel()

    @property
    def running(self) -> bool:
        return self.task.running
