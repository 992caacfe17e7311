"""Level progression: targets, speed schedule and completion bonus."""

import random

from .constants import LEVELS_PER_SPEEDUP
from .models import GameOptions


def target_for_level(level: int, rng: random.Random) -> int:
    # Level 1 lands around 14-18, level 20 around 90-94
    return 10 + level * 4 + rng.randrange(5)


def step_interval(level: int, options: GameOptions) -> int:
    """Milliseconds between snake steps; speeds up every few levels."""
    speed_level = (level - 1) // LEVELS_PER_SPEEDUP
    return max(options.min_speed, options.base_speed - speed_level * options.speed_decrement)


def level_bonus(level_steps: int, lives: int, options: GameOptions) -> int:
    """Fewer foods eaten and more lives left score higher."""
    step_bonus = max(0, options.level_bonus - level_steps * options.step_penalty)
    return step_bonus + lives * options.life_bonus
