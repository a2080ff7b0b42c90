"""
Simulation driver — one frame task: fixed step, corner ejection, render.

The step size never depends on wall-clock time, so a run is reproducible
frame for frame at the cost of slowing down when the display drops frames.
"""
from typing import Optional

import pygame

from physics.config import DemoConfig
from physics.engine import SimulationSession
from physics.renderer import Renderer
from physics.scheduler import FrameScheduler, FrameTask


class SimulationDriver:

    def __init__(self, session: SimulationSession, renderer: Renderer,
                 surface: pygame.Surface, scheduler: FrameScheduler):
        self.session = session
        self.renderer = renderer
        self.surface = surface
        self.task = FrameTask(scheduler, self.frame, name='simulation')

    def frame(self, now: float = 0.0):
        self.session.step()
        self.renderer.render(self.surface, self.session.balls)

    def restart(self, config: Optional[DemoConfig] = None):
        config = config or DemoConfig()
        self.renderer.set_style(config.graphics_style)
        self.session.rebuild(config)

    def start(self):
        self.task.start()

    def stop(self):
        self.task.cancel()

    @property
    def running(self) -> bool:
        return self.task.running
