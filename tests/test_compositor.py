import numpy as np
import pygame
import pytest

import background as B
from background.compositor import BackgroundCompositor, grid_counts, tile_origins
from background.tile import TileGenerator
from physics.scheduler import FrameScheduler


def _coverage(canvas_w, canvas_h, tile_w, tile_h):
    covered = np.zeros((canvas_h, canvas_w), dtype=bool)
    for x, y in tile_origins(canvas_w, canvas_h, tile_w, tile_h):
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(canvas_w, x + tile_w), min(canvas_h, y + tile_h)
        if x1 > x0 and y1 > y0:
            covered[y0:y1, x0:x1] = True
    return covered


def test_grid_counts():
    assert grid_counts(1920, 1080, 220, 80) == (15, 11)
    assert grid_counts(100, 80, 100, 80) == (2, 3)


def test_grid_counts_rejects_empty_tile():
    with pytest.raises(ValueError):
        grid_counts(100, 100, 0, 10)


@pytest.mark.parametrize('canvas', [(1920, 1080), (1, 1), (333, 97), (50, 400)])
@pytest.mark.parametrize('tile', [(1, 1), (80, 80), (221, 80), (3, 7), (2000, 1200)])
def test_staggered_tiling_covers_canvas(canvas, tile):
    assert _coverage(*canvas, *tile).all()


def test_odd_rows_shift_by_half_a_tile():
    origins = list(tile_origins(400, 160, 101, 80))
    rows, cols = grid_counts(400, 160, 101, 80)
    assert origins[0] == (0, 0)
    assert origins[cols] == (-50, 80)
    assert origins[2 * cols] == (0, 160)
    assert len(origins) == rows * cols


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def canvas():
    return pygame.Surface((640, 360), 0, 32)


def _compositor(canvas, scheduler, text='pemmyz', animated=False, **kwargs):
    generator = TileGenerator(text, rng=np.random.RandomState(0), **kwargs)
    return BackgroundCompositor(canvas, generator, scheduler, animated=animated)


def test_static_mode_renders_once(canvas, scheduler):
    compositor = _compositor(canvas, scheduler)
    compositor.start()
    assert compositor.generator.render_count == 1
    assert compositor.cached is not None
    for t in range(5):
        scheduler.run_frame(t)
    assert compositor.generator.render_count == 1
    assert not compositor.running
    assert canvas.get_at((0, 0)) == compositor.cached.get_at((0, 0))


def test_static_resize_redraws_from_cache(scheduler):
    compositor = _compositor(pygame.Surface((320, 200), 0, 32), scheduler)
    compositor.start()
    bigger = pygame.Surface((800, 600), 0, 32)
    compositor.resize(bigger)
    assert compositor.generator.render_count == 1
    assert compositor.draws == 2
    assert bigger.get_at((799, 599)) != pygame.Color(0, 0, 0)


def test_animated_mode_regenerates_every_frame(canvas, scheduler):
    compositor = _compositor(canvas, scheduler, animated=True)
    compositor.start()
    assert compositor.cached is None
    assert compositor.generator.render_count == 1
    for t in range(4):
        scheduler.run_frame(t)
    assert compositor.generator.render_count == 5


def test_animated_start_draws_before_the_first_frame(scheduler):
    canvas = pygame.Surface((640, 360), 0, 32)
    canvas.fill((0, 0, 0))
    compositor = _compositor(canvas, scheduler, animated=True)
    compositor.start()
    assert compositor.draws == 1
    assert compositor.running
    assert canvas.get_at((639, 359)) != pygame.Color(0, 0, 0)


def test_toggle_on_and_off_leaves_no_loop(canvas, scheduler):
    compositor = _compositor(canvas, scheduler)
    compositor.start()
    compositor.toggle_animation()
    scheduler.run_frame(0)
    compositor.toggle_animation()
    renders = compositor.generator.render_count
    for t in range(1, 4):
        scheduler.run_frame(t)
    assert compositor.generator.render_count == renders
    assert scheduler.pending == 0


def test_repeated_restarts_keep_a_single_animation(canvas, scheduler):
    compositor = _compositor(canvas, scheduler, animated=True)
    compositor.start()
    compositor.set_text('hello')
    compositor.set_animated(True)
    compositor.toggle_animation()
    compositor.toggle_animation()
    for t in range(3):
        before = compositor.generator.render_count
        scheduler.run_frame(t)
        assert compositor.generator.render_count == before + 1
    assert scheduler.pending == 1


def test_text_change_resizes_tile_and_redraws(canvas, scheduler):
    compositor = _compositor(canvas, scheduler, text='a')
    compositor.start()
    narrow = compositor.generator.width
    compositor.set_text('a much longer label')
    assert compositor.generator.width > narrow
    assert compositor.cached.get_width() == compositor.generator.width
    assert compositor.generator.render_count == 2


def test_empty_text_still_fills_canvas(canvas, scheduler):
    compositor = _compositor(canvas, scheduler, text='')
    compositor.start()
    assert compositor.generator.width == B.TILE_MIN_WIDTH
    w, h = canvas.get_size()
    assert _coverage(w, h, compositor.generator.width, compositor.generator.height).all()
    pixels = pygame.surfarray.array3d(canvas)
    assert pixels[:, :, 1].min() > 0
