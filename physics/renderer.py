import logging
import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

import numpy as np

import physics as P

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


class RenderMode(Enum):
    CUTOUT_HOLES = 'new'
    FILLED_OUTLINED = 'old'
    SPIN_INDICATOR = 'spin'

    @classmethod
    def from_style(cls, style) -> 'RenderMode':
        if isinstance(style, cls):
            return style
        try:
            return cls(str(style).strip().lower())
        except ValueError:
            logging.warning(f"Unknown graphics style {style!r}, drawing cut-out balls")
            return cls.CUTOUT_HOLES


@dataclass(frozen=True)
class HoleGeometry:
    radius: float
    offset: float


# (min ball radius px, holes), largest tier first
HOLE_TIERS = (
    (55.0, HoleGeometry(radius=13.33, offset=26.66)),
    (25.0, HoleGeometry(radius=6.0, offset=12.0)),
    (0.0, HoleGeometry(radius=4.5, offset=9.0)),
)

CUTOUT_FILL = (40, 40, 40, 128)
OUTLINE_COLOR = (255, 255, 255, 255)
RING_COLOR = (0, 0, 0, 102)
LINE_WIDTH = 2
TRANSPARENT = (0, 0, 0, 0)


def hole_geometry(radius_px: float) -> HoleGeometry:
    for threshold, holes in HOLE_TIERS:
        if radius_px >= threshold:
            return holes
    return HOLE_TIERS[-1][1]


def parse_color(color) -> pygame.Color:
    try:
        return pygame.Color(color)
    except (ValueError, TypeError):
        logging.warning(f"Invalid ball color {color!r}, using {P.DEFAULT_COLOR}")
        return pygame.Color(P.DEFAULT_COLOR)


def _sprite(radius: float) -> Tuple[pygame.Surface, Tuple[float, float]]:
    size = int(math.ceil(radius * 2)) + 4
    surf = pygame.Surface((size, size), pygame.SRCALPHA)
    surf.fill(TRANSPARENT)
    return surf, (size / 2, size / 2)


def draw_cutout(radius: float, holes: HoleGeometry) -> pygame.Surface:
    """Translucent gray disc with the two holes punched out (alpha → 0)."""
    surf, (cx, cy) = _sprite(radius)
    pygame.draw.circle(surf, CUTOUT_FILL, (cx, cy), radius)
    # pygame.draw writes pixels without blending, so a zero-alpha fill erases
    pygame.draw.circle(surf, TRANSPARENT, (cx - holes.offset, cy), holes.radius)
    pygame.draw.circle(surf, TRANSPARENT, (cx + holes.offset, cy), holes.radius)
    return surf


def draw_outlined(radius: float, holes: HoleGeometry, color: pygame.Color) -> pygame.Surface:
    """Solid disc, white rim, two stroked rings as decorative holes."""
    surf, (cx, cy) = _sprite(radius)
    pygame.draw.circle(surf, color, (cx, cy), radius)
    pygame.draw.circle(surf, OUTLINE_COLOR, (cx, cy), radius, LINE_WIDTH)

    rings = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    rings.fill(TRANSPARENT)
    pygame.draw.circle(rings, RING_COLOR, (cx - holes.offset, cy), holes.radius, LINE_WIDTH)
    pygame.draw.circle(rings, RING_COLOR, (cx + holes.offset, cy), holes.radius, LINE_WIDTH)
    surf.blit(rings, (0, 0))
    return surf


def draw_spin(radius: float, color: pygame.Color) -> pygame.Surface:
    """Solid disc with a diametrical line and a short cross tick to show spin."""
    surf, (cx, cy) = _sprite(radius)
    pygame.draw.circle(surf, color, (cx, cy), radius)
    pygame.draw.circle(surf, OUTLINE_COLOR, (cx, cy), radius, LINE_WIDTH)
    pygame.draw.line(surf, OUTLINE_COLOR, (cx - radius, cy), (cx + radius, cy), LINE_WIDTH)
    tick = radius * 0.25
    pygame.draw.line(surf, OUTLINE_COLOR, (cx, cy - tick), (cx, cy + tick), LINE_WIDTH)
    return surf


class Renderer:
    """Maps ball state → pixels on a per-pixel-alpha layer."""

    def __init__(self, mode=RenderMode.CUTOUT_HOLES):
        self.mode = RenderMode.from_style(mode)

    def set_style(self, style):
        self.mode = RenderMode.from_style(style)

    def ball_sprite(self, ball) -> pygame.Surface:
        """Unrotated sprite for one ball in the current mode."""
        holes = hole_geometry(ball.radius)
        if self.mode is RenderMode.CUTOUT_HOLES:
            return draw_cutout(ball.radius, holes)
        color = parse_color(ball.color)
        if self.mode is RenderMode.SPIN_INDICATOR:
            return draw_spin(ball.radius, color)
        return draw_outlined(ball.radius, holes, color)

    def draw_ball(self, surface: pygame.Surface, ball):
        x, y = ball.pixel_position
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(ball.angle)):
            return
        sprite = self.ball_sprite(ball)
        # canvas angles grow clockwise on screen, pygame.transform.rotate counter-clockwise
        rotated = pygame.transform.rotate(sprite, -math.degrees(ball.angle))
        surface.blit(rotated, rotated.get_rect(center=(round(x), round(y))))

    def render(self, surface: pygame.Surface, balls: Iterable):
        surface.fill(TRANSPARENT)
        for ball in balls:
            self.draw_ball(surface, ball)

    def render_frame(self, balls: Iterable, size=(P.WIDTH, P.HEIGHT)) -> np.ndarray:
        """Render single frame → (H, W, 4) uint8 RGBA."""
        surface = pygame.Surface(size, pygame.SRCALPHA)
        self.render(surface, balls)
        rgb = pygame.surfarray.array3d(surface).transpose(1, 0, 2)
        alpha = pygame.surfarray.array_alpha(surface).T
        return np.dstack([rgb, alpha]).astype(np.uint8)
