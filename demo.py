"""
Bouncing balls over a retro tiled wallpaper.
Run: python demo.py [--style old] [--graphics spin] [--text hello] [--animate]

Controls:
  click       restart the balls (options closed)
  A           toggle animated background noise
  O           options: ←/→ start style, ↑/↓ graphics, type label, Enter apply, Esc close
  F           toggle fullscreen
  Q / Esc     quit
"""
import argparse
import logging
import os
from typing import Optional, Tuple

import numpy as np

import physics as P
from physics.config import DemoConfig, START_STYLES, GRAPHICS_STYLES
from physics.engine import SimulationSession, ArenaConfig
from physics.renderer import Renderer
from physics.driver import SimulationDriver
from physics.scheduler import FrameScheduler
from background.tile import TileGenerator
from background.compositor import BackgroundCompositor

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame

WINDOW_SIZE = (1280, 720)
FPS = 60
OVERLAY_BG = (0, 0, 0, 190)
OVERLAY_TEXT = (220, 220, 220)


def letterbox(window_size: Tuple[int, int],
              canvas_size: Tuple[int, int] = (P.WIDTH, P.HEIGHT)) -> Tuple[float, pygame.Rect]:
    """Uniform scale that fits the canvas in the window, and the centred target rect."""
    ww, wh = window_size
    cw, ch = canvas_size
    scale = min(ww / cw, wh / ch)
    w, h = max(1, round(cw * scale)), max(1, round(ch * scale))
    rect = pygame.Rect(0, 0, w, h)
    rect.center = (ww // 2, wh // 2)
    return scale, rect


def _cycle(options, current, step):
    i = options.index(current) if current in options else 0
    return options[(i + step) % len(options)]


class DemoApp:

    def __init__(self, config: Optional[DemoConfig] = None, seed: Optional[int] = None,
                 size: Tuple[int, int] = (P.WIDTH, P.HEIGHT)):
        pygame.init()
        self.config = config or DemoConfig()
        self.pending = self.config
        self.size = size
        self.menu_open = False
        self.running = True
        self.fullscreen = False
        self.window: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

        self.scheduler = FrameScheduler()
        self.canvas = pygame.Surface(size, 0, 32)
        self.bg_layer = pygame.Surface(size, 0, 32)
        self.sim_layer = pygame.Surface(size, pygame.SRCALPHA)

        self.session = SimulationSession(ArenaConfig(width=size[0], height=size[1], seed=seed))
        self.driver = SimulationDriver(self.session, Renderer(self.config.graphics_style),
                                       self.sim_layer, self.scheduler)
        generator = TileGenerator(self.config.background_text,
                                  rng=np.random.RandomState(seed))
        self.compositor = BackgroundCompositor(self.bg_layer, generator, self.scheduler,
                                               animated=self.config.noise_animated)

        self.driver.restart(self.config)
        self.driver.start()
        self.compositor.start()

    # Configuration

    def apply(self, config: DemoConfig):
        """Rebuild the balls and regenerate the wallpaper for `config`."""
        self.config = config
        self.pending = config
        self.driver.restart(config)
        self.compositor.animated = config.noise_animated
        self.compositor.set_text(config.background_text)
        logging.info(f"Applied {config}")

    def restart(self):
        self.driver.restart(self.config)

    def toggle_noise(self):
        animated = self.compositor.toggle_animation()
        self.config = self.config.with_changes(noise_animated=animated)

    # Events

    def window_to_canvas(self, pos) -> Optional[Tuple[float, float]]:
        if self.window is None:
            return pos
        scale, rect = letterbox(self.window.get_size(), self.size)
        if not rect.collidepoint(pos):
            return None
        return (pos[0] - rect.x) / scale, (pos[1] - rect.y) / scale

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if self.menu_open:
                self._menu_key(event)
            else:
                self._key(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not self.menu_open and self.window_to_canvas(event.pos) is not None:
                self.restart()

    def _key(self, event):
        if event.key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif event.key == pygame.K_a:
            self.toggle_noise()
        elif event.key == pygame.K_o:
            self.pending = self.config
            self.menu_open = True
        elif event.key == pygame.K_f:
            self.toggle_fullscreen()

    def _menu_key(self, event):
        p = self.pending
        if event.key == pygame.K_ESCAPE:
            self.menu_open = False
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.menu_open = False
            self.apply(p)
        elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
            step = 1 if event.key == pygame.K_RIGHT else -1
            self.pending = p.with_changes(start_style=_cycle(START_STYLES, p.start_style, step))
        elif event.key in (pygame.K_UP, pygame.K_DOWN):
            step = 1 if event.key == pygame.K_DOWN else -1
            self.pending = p.with_changes(
                graphics_style=_cycle(GRAPHICS_STYLES, p.graphics_style, step))
        elif event.key == pygame.K_BACKSPACE:
            self.pending = p.with_changes(background_text=p.background_text[:-1])
        elif event.unicode and event.unicode.isprintable():
            self.pending = p.with_changes(background_text=p.background_text + event.unicode)

    # Frame

    def tick(self, now: float = 0.0) -> pygame.Surface:
        self.scheduler.run_frame(now)
        self.canvas.blit(self.bg_layer, (0, 0))
        self.canvas.blit(self.sim_layer, (0, 0))
        if self.menu_open:
            self.draw_menu(self.canvas)
        return self.canvas

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 40)
        return self._font

    def draw_menu(self, surface: pygame.Surface):
        p = self.pending
        lines = [
            "OPTIONS",
            f"Start style (Left/Right): {p.start_style}",
            f"Graphics (Up/Down):       {p.graphics_style}",
            f"Background text:          {p.background_text}_",
            "Enter: apply    Esc: close",
        ]
        panel = pygame.Surface((760, 40 + 48 * len(lines)), pygame.SRCALPHA)
        panel.fill(OVERLAY_BG)
        y = 20
        for line in lines:
            txt = self.font.render(line, True, OVERLAY_TEXT)
            panel.blit(txt, (24, y))
            y += 48
        surface.blit(panel, panel.get_rect(center=surface.get_rect().center))

    # Window

    def open_window(self):
        if self.fullscreen:
            self.window = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.window = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption('Bouncing Balls')

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        self.open_window()

    def present(self, frame: pygame.Surface):
        _, rect = letterbox(self.window.get_size(), self.size)
        self.window.fill((0, 0, 0))
        self.window.blit(pygame.transform.smoothscale(frame, rect.size), rect)
        pygame.display.flip()

    def run(self):
        self.open_window()
        clock = pygame.time.Clock()
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            frame = self.tick(pygame.time.get_ticks() / 1000.0)
            self.present(frame)
            clock.tick(FPS)
        self.driver.stop()
        self.compositor.stop()
        pygame.quit()


def main():
    parser = argparse.ArgumentParser(description="Bouncing balls over a tiled retro background")
    parser.add_argument('--style', default='new', help="Start style: new | old")
    parser.add_argument('--graphics', default='new', help="Graphics style: new | old | spin")
    parser.add_argument('--text', default='pemmyz', help="Background label text")
    parser.add_argument('--animate', action='store_true', help="Animate background noise")
    parser.add_argument('--seed', type=int, default=None, help="Seed for launch angles and noise")
    parser.add_argument('--fullscreen', action='store_true')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(message)s')

    config = DemoConfig(start_style=args.style, graphics_style=args.graphics,
                        background_text=args.text, noise_animated=args.animate)
    app = DemoApp(config, seed=args.seed)
    app.fullscreen = args.fullscreen
    print(f"Starting: style={config.start_style} graphics={config.graphics_style} "
          f"text={config.background_text!r} animated={config.noise_animated}")
    app.run()


if __name__ == "__main__":
    main()
