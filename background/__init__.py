# ── Background tile defaults ──

# Canvas (matches the simulation canvas)
WIDTH = 1920
HEIGHT = 1080

# Tile
FONT_NAMES = 'arialblack,impact,arial,sans'
FONT_SIZE = 44
FONT_BOLD = True
TILE_HEIGHT = 80
TILE_PADDING = 60
TILE_MIN_WIDTH = 80   # >= TILE_PADDING so empty text lands exactly on the floor
ROW_STAGGER = 0.5     # fraction of the tile width odd rows shift left

# Colours (RGB, alpha as 0..1)
BG_COLOR = (12, 55, 12)
GLOW_COLOR = (0, 255, 0)
GLOW_ALPHA = 0.20
GLOW_BLUR = 10
TEXT_COLOR_1 = (0, 120, 0)
TEXT_ALPHA_1 = 0.55
TEXT_COLOR_2 = (0, 90, 0)
TEXT_ALPHA_2 = 0.65

# Post effects
SMEAR_ALPHA = 0.10
NOISE_AMPLITUDE = 35 * 0.85
NOISE_CHANNEL_WEIGHTS = (0.4, 1.0, 0.4)
SCANLINE_ALPHA = 0.08
SCANLINE_SPACING = 2
