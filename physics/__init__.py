# ── Central defaults (tune here, not scattered across files) ──

# Canvas (fixed logical resolution, letterboxed by the front end)
WIDTH = 1920
HEIGHT = 1080
SCALE = 30.0          # pixels per simulation unit

# Arena
WALL_THICKNESS = 50   # px, thick enough that fast balls cannot tunnel

# Balls
BASE_RADIUS_PX = 60
BALL_DENSITY = 1.0
BALL_FRICTION = 0.3
BALL_RESTITUTION = 1.0
WALL_FRICTION = 0.0
WALL_RESTITUTION = 1.0
SPAWN_SPEED = 25.0    # units / s

# Grid layout
ROWS = 3
ROW_HEIGHT = 140      # px between row centres
SMALL_OFFSET_X = -130
LARGE_OFFSET_X = 150
SMALL_COLOR = '#3357FF'
MEDIUM_COLOR = '#33FF57'
LARGE_COLOR = '#FF5733'
DEFAULT_COLOR = '#808080'

# Simulation
DT = 1.0 / 60.0
BULLET_MAX_TRAVEL = 0.5   # max fraction of a radius a bullet may move per sub-step
MAX_SUBSTEPS = 8
COLLISION_SLOP_PX = 0.5

# Corner ejection
CORNER_TOLERANCE_PX = 1.0
CORNER_NUDGE_PX = 2.0
MIN_EJECT_SPEED = 15.0

SEED = None
