"""Data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import (
    BASE_SPEED, MIN_SPEED, SPEED_DECREMENT, MAX_LEVEL, MAX_LIVES,
    FOOD_COUNT, FOOD_REWARD, LEVEL_BONUS, STEP_PENALTY, LIFE_BONUS,
    OPERATION_GLYPHS, OPERATION_COLORS,
)

Cell = tuple[int, int]


class Sound(Enum):
    EAT = "eat"
    WIN = "win"
    LEVEL_COMPLETE = "levelComplete"
    LOSE = "lose"


@dataclass
class GameOptions:
    grade: Optional[str] = None
    max_level: int = MAX_LEVEL
    base_speed: int = BASE_SPEED
    min_speed: int = MIN_SPEED
    speed_decrement: int = SPEED_DECREMENT
    lives: int = MAX_LIVES
    food_count: int = FOOD_COUNT
    food_reward: int = FOOD_REWARD
    level_bonus: int = LEVEL_BONUS
    step_penalty: int = STEP_PENALTY
    life_bonus: int = LIFE_BONUS


@dataclass
class FoodItem:
    cell: Cell
    op: str
    value: int

    @property
    def text(self) -> str:
        return f"{OPERATION_GLYPHS[self.op]}{self.value}"

    @property
    def color(self) -> str:
        return OPERATION_COLORS[self.op]


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: str
    life: float = 1.0


@dataclass
class FloatingText:
    x: float
    y: float
    text: str
    life: float = 1.0
    dy: float = -1
