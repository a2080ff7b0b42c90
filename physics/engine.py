"""
2D arena engine — pymunk world, boundary walls, ball registry, corner ejection.

- Closed rectangular arena of four thick static boxes
- Elastic (restitution 1.0), undamped, gravity-free circular balls
- Fixed-step advance, swept into sub-steps for bullet balls
- Corner ejection after every step so balls never stall in a corner
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pymunk

import physics as P
from physics.config import DemoConfig
from physics.units import p2m, vec_p2m, vec_m2p


@dataclass
class Ball:
    """Handle on one dynamic body. Appearance lives here, physics in the body."""
    body: pymunk.Body
    shape: pymunk.Circle
    radius: float          # px
    color: str
    bullet: bool = True
    ball_id: int = 0

    @property
    def radius_m(self) -> float:
        return self.shape.radius

    @property
    def density(self) -> float:
        return self.shape.density

    @property
    def mass(self) -> float:
        return self.body.mass

    @property
    def position(self) -> np.ndarray:
        return np.array([self.body.position.x, self.body.position.y])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.body.velocity.x, self.body.velocity.y])

    @velocity.setter
    def velocity(self, v):
        self.body.velocity = (float(v[0]), float(v[1]))

    @property
    def speed(self) -> float:
        return self.body.velocity.length

    @property
    def angle(self) -> float:
        return self.body.angle

    @property
    def angular_velocity(self) -> float:
        return self.body.angular_velocity

    @property
    def pixel_position(self) -> Tuple[float, float]:
        return vec_m2p(self.body.position)

    @property
    def state(self) -> np.ndarray:
        p, v = self.body.position, self.body.velocity
        return np.array([p.x, p.y, v.x, v.y])


@dataclass(frozen=True)
class BallSpec:
    x: float               # px
    y: float               # px
    radius: float          # px
    color: str
    should_move: bool


@dataclass
class Bounds:
    left: float
    right: float
    top: float
    bottom: float


@dataclass
class ArenaConfig:
    width: int = P.WIDTH
    height: int = P.HEIGHT
    wall_thickness: float = P.WALL_THICKNESS
    dt: float = P.DT
    spawn_speed: float = P.SPAWN_SPEED
    min_eject_speed: float = P.MIN_EJECT_SPEED
    corner_tolerance_px: float = P.CORNER_TOLERANCE_PX
    corner_nudge_px: float = P.CORNER_NUDGE_PX
    seed: Optional[int] = P.SEED


def layout_grid(width: float, height: float, start_style: str) -> List[BallSpec]:
    """
    Three rows of small / medium / large balls centred on the canvas.

    'old' sets every ball moving; 'new' only the top-row small ball.
    """
    cx, cy = width / 2, height / 2
    start_y = cy - P.ROW_HEIGHT * (P.ROWS - 1) / 2
    is_old = start_style == 'old'

    small_r = P.BASE_RADIUS_PX * 0.5 * 0.75
    mid_r = P.BASE_RADIUS_PX * 0.5
    big_r = P.BASE_RADIUS_PX

    specs = []
    for r in range(P.ROWS):
        y = start_y + r * P.ROW_HEIGHT
        is_top = r == 0
        specs.append(BallSpec(cx + P.SMALL_OFFSET_X, y, small_r, P.SMALL_COLOR,
                              is_old or is_top))
        specs.append(BallSpec(cx, y, mid_r, P.MEDIUM_COLOR, is_old))
        specs.append(BallSpec(cx + P.LARGE_OFFSET_X, y, big_r, P.LARGE_COLOR, is_old))
    return specs


class SimulationSession:
    """
    Owns the world, the arena walls and the ball registry.

    Step: sweep sub-steps → corner ejection. Rendering is the driver's job.
    """

    def __init__(self, config: Optional[ArenaConfig] = None):
        self.config = config or ArenaConfig()
        self.rng = np.random.RandomState(self.config.seed)
        self.space = pymunk.Space()
        self.space.gravity = (0, 0)
        self.space.damping = 1.0
        self.space.collision_slop = p2m(P.COLLISION_SLOP_PX)
        self.walls: List[pymunk.Body] = []
        self.bounds: Optional[Bounds] = None
        self.balls: List[Ball] = []
        self.frame: int = 0
        self.time: float = 0.0
        self.ejection_log: List[Dict] = []
        self.build_arena(self.config.width, self.config.height,
                         self.config.wall_thickness)

    # Arena

    def build_arena(self, width: float, height: float, thickness: float) -> List[pymunk.Body]:
        for body in self.walls:
            self.space.remove(body, *body.shapes)
        self.walls = []

        t = thickness
        self._add_wall(width / 2, -t / 2, width, t)              # top
        self._add_wall(width / 2, height + t / 2, width, t)      # bottom
        self._add_wall(-t / 2, height / 2, t, height)            # left
        self._add_wall(width + t / 2, height / 2, t, height)     # right

        self.bounds = Bounds(left=0.0, right=p2m(width), top=0.0, bottom=p2m(height))
        return self.walls

    def _add_wall(self, x: float, y: float, w: float, h: float):
        body = pymunk.Body(body_type=pymunk.Body.STATIC)
        body.position = vec_p2m((x, y))
        shape = pymunk.Poly.create_box(body, vec_p2m((w, h)))
        shape.friction = P.WALL_FRICTION
        shape.elasticity = P.WALL_RESTITUTION
        self.space.add(body, shape)
        self.walls.append(body)

    # Balls

    def spawn_ball(self, x_px: float, y_px: float, radius_px: float, color: str,
                   should_move: bool, into: Optional[List[Ball]] = None) -> Ball:
        registry = self.balls if into is None else into
        radius_m = p2m(radius_px)

        body = pymunk.Body()
        body.position = vec_p2m((x_px, y_px))
        shape = pymunk.Circle(body, radius_m)
        shape.density = P.BALL_DENSITY
        shape.friction = P.BALL_FRICTION
        shape.elasticity = P.BALL_RESTITUTION

        if should_move:
            angle = self.rng.uniform(0, 2 * np.pi)
            speed = self.config.spawn_speed
            body.velocity = (speed * math.cos(angle), speed * math.sin(angle))
        else:
            body.velocity = (0.0, 0.0)
            body.angular_velocity = 0.0

        self.space.add(body, shape)
        ball = Ball(body=body, shape=shape, radius=radius_px, color=color,
                    bullet=True, ball_id=len(registry))
        registry.append(ball)
        return ball

    def destroy_balls(self):
        for ball in self.balls:
            self.space.remove(ball.body, ball.shape)
        self.balls = []

    def rebuild(self, config: Optional[DemoConfig] = None) -> List[Ball]:
        """Destroy every ball, then lay out a fresh grid for `config`."""
        config = config or DemoConfig()
        self.destroy_balls()
        fresh: List[Ball] = []
        for spec in layout_grid(self.config.width, self.config.height, config.start_style):
            self.spawn_ball(spec.x, spec.y, spec.radius, spec.color, spec.should_move,
                            into=fresh)
        self.balls = fresh
        self.ejection_log = []
        return self.balls

    init_game = rebuild

    def for_each_ball(self, fn: Callable[[Ball], None]):
        for ball in list(self.balls):
            fn(ball)

    # Stepping

    def substeps(self) -> int:
        """Sub-steps needed so no bullet ball moves more than a fraction of its radius."""
        n = 1
        for ball in self.balls:
            if not ball.bullet:
                continue
            travel = ball.speed * self.config.dt
            limit = P.BULLET_MAX_TRAVEL * ball.radius_m
            if math.isfinite(travel) and limit > 0:
                n = max(n, math.ceil(travel / limit))
        return min(n, P.MAX_SUBSTEPS)

    def advance(self):
        n = self.substeps()
        sub_dt = self.config.dt / n
        for _ in range(n):
            self.space.step(sub_dt)

    def step(self) -> List[Ball]:
        self.advance()
        self.eject_from_corners()
        self.frame += 1
        self.time += self.config.dt
        return self.balls

    def eject_from_corners(self) -> int:
        """
        Push balls touching two adjacent walls out along the 45° diagonal.

        Two near-simultaneous wall contacts can cancel a ball's velocity instead
        of reflecting it; this overrides the solver for that case only.
        Returns the number of balls ejected this frame.
        """
        b = self.bounds
        tol = p2m(self.config.corner_tolerance_px)
        nudge = p2m(self.config.corner_nudge_px)
        ejected = 0

        for ball in self.balls:
            pos = ball.body.position
            vel = ball.body.velocity
            if not (math.isfinite(pos.x) and math.isfinite(pos.y)
                    and math.isfinite(vel.x) and math.isfinite(vel.y)):
                continue
            r = ball.radius_m

            left = pos.x - r <= b.left + tol
            right = pos.x + r >= b.right - tol
            top = pos.y - r <= b.top + tol
            bottom = pos.y + r >= b.bottom - tol

            if left and top:
                corner, sx, sy = 'top_left', 1.0, 1.0
            elif right and top:
                corner, sx, sy = 'top_right', -1.0, 1.0
            elif left and bottom:
                corner, sx, sy = 'bottom_left', 1.0, -1.0
            elif right and bottom:
                corner, sx, sy = 'bottom_right', -1.0, -1.0
            else:
                continue

            speed = max(vel.length, self.config.min_eject_speed)
            component = speed / math.sqrt(2.0)
            x = b.left + r + nudge if sx > 0 else b.right - r - nudge
            y = b.top + r + nudge if sy > 0 else b.bottom - r - nudge

            ball.body.velocity = (sx * component, sy * component)
            ball.body.position = (x, y)
            self.space.reindex_shapes_for_body(ball.body)

            self.ejection_log.append({
                'frame': self.frame, 'ball_id': ball.ball_id, 'corner': corner,
                'speed': speed,
            })
            ejected += 1
        return ejected

    # State access

    def get_state(self) -> np.ndarray:
        """(n_balls, 4) → [x, y, vx, vy] in units"""
        return np.array([b.state for b in self.balls])

    def total_kinetic_energy(self) -> float:
        return sum(0.5 * b.mass * b.speed ** 2
                   + 0.5 * b.body.moment * b.angular_velocity ** 2
                   for b in self.balls)

    def total_momentum(self) -> np.ndarray:
        if not self.balls:
            return np.zeros(2)
        return sum(b.mass * b.velocity for b in self.balls)


def generate_run(demo: Optional[DemoConfig] = None, n_frames: int = 600,
                 config: Optional[ArenaConfig] = None) -> Dict:
    """Headless run. Returns dict with states, energy, momentum, ejections per frame."""
    session = SimulationSession(config)
    session.rebuild(demo or DemoConfig())

    states = [session.get_state()]
    energy = [session.total_kinetic_energy()]
    momentum = [session.total_momentum()]
    ejections = [0]

    for _ in range(n_frames):
        before = len(session.ejection_log)
        session.step()
        states.append(session.get_state())
        energy.append(session.total_kinetic_energy())
        momentum.append(session.total_momentum())
        ejections.append(len(session.ejection_log) - before)

    return {
        'states': np.array(states),
        'radii': np.array([b.radius for b in session.balls]),
        'energy': np.array(energy),
        'momentum': np.array(momentum),
        'ejections': np.array(ejections),
        'ejection_log': session.ejection_log,
        'config': session.config,
    }
