import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'

import pygame
import pytest

from physics.engine import SimulationSession, ArenaConfig


@pytest.fixture(scope='session', autouse=True)
def pygame_headless():
    pygame.init()
    pygame.font.init()
    yield
    pygame.quit()


@pytest.fixture
def session():
    return SimulationSession(ArenaConfig(seed=1234))


class FixedFont:
    """Ten pixels per character, so tile widths are easy to predict."""

    def size(self, text):
        return len(text) * 10, 40

    def render(self, text, antialias, color):
        surf = pygame.Surface((max(1, len(text) * 10), 40), pygame.SRCALPHA)
        surf.fill((*color, 255))
        return surf


@pytest.fixture
def fixed_font():
    return FixedFont()
