GRID_ROWS = 8
GRID_COLS = 8
COLOR_COUNT = 6

# Shortest line of compatible tiles that counts as a run.
MIN_RUN_LENGTH = 3
# Run lengths that promote a tile to a special kind.
AREA_CLEAR_RUN_LENGTH = 4
WILDCARD_RUN_LENGTH = 5

POINTS_PER_CELL = 10

# Hard ceiling on cascade passes per move; hitting it ends resolution early.
MAX_CASCADE_PASSES = 80
# Attempts the board generator makes before giving up on a match-free, playable layout.
MAX_BOARD_ATTEMPTS = 200

BOTTOM_MARGIN = 20
HUD_HEIGHT = 48

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85

# Arcade mouse button codes.
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4
