"""Game constants."""

import os

# Desktop grid
GRID_COLS, GRID_ROWS = 20, 15
CELL_SIZE = 40

# Responsive sizing (viewports narrower than MOBILE_BREAKPOINT)
MOBILE_BREAKPOINT = 850
MIN_COLS, MIN_ROWS = 8, 10
MAX_CELL_SIZE = 45
HUD_HEIGHT_ESTIMATE = 160
SAFE_AREA_BUFFER = 40
HORIZONTAL_PADDING = 20

# Tick schedule, milliseconds
BASE_SPEED = 400
MIN_SPEED = 60
SPEED_DECREMENT = 20
LEVELS_PER_SPEEDUP = 4
FRAME_RATE = 60

MAX_LEVEL = 20
MAX_LIVES = 3
FOOD_COUNT = 3
SNAKE_LENGTH = 3
SPAWN_ATTEMPTS = 100

# Scoring
FOOD_REWARD = 10
LEVEL_BONUS = 500
STEP_PENALTY = 50
LIFE_BONUS = 100

# Effects
BURST_PARTICLES = 8
CONFETTI_PARTICLES = 100
PARTICLE_LIFE = 1.0
CONFETTI_LIFE = 2.0
PARTICLE_DECAY = 0.05
TEXT_LIFE = 1.0
TEXT_DECAY = 0.02
TEXT_DRIFT = -1

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# Operators unlocked per grade
GRADE_OPERATIONS = {
    "1": ["+", "-"],
    "2": ["+", "-"],
    "3": ["+", "-", "*"],
    "4": ["+", "-", "*", "/"],
}

OPERATION_GLYPHS = {"+": "+", "-": "−", "*": "×", "/": "÷"}

GREEN = "#10b981"
RED = "#ef4444"
OPERATION_COLORS = {"+": GREEN, "*": GREEN, "-": RED, "/": RED}

SERVER_HOST = os.environ.get("MATHSNAKE_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("MATHSNAKE_PORT", "8765"))
