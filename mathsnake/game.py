"""Core game state and logic."""

import logging
import random
from typing import Optional, Union

from .audio import AudioSink, SilentAudio
from .constants import DIRECTIONS, GRADE_OPERATIONS
from .effects import Effects
from .food import apply_operation, spawn_food
from .grid import Grid
from .levels import target_for_level, step_interval, level_bonus
from .models import Cell, FoodItem, GameOptions, Sound

logger = logging.getLogger(__name__)

Direction = tuple[int, int]


class GameState:
    """One player's run: snake, food, counters and effects.

    Nothing here blocks or schedules. A driver calls `frame(now)` once per
    rendered frame; input handlers only call `stage_direction`.
    """

    def __init__(self, options: Optional[GameOptions] = None, grid: Optional[Grid] = None,
                 audio: Optional[AudioSink] = None, rng: Optional[random.Random] = None):
        self.options = options or GameOptions()
        self.grid = grid or Grid()
        self.pending_grid: Optional[Grid] = None
        self.audio = audio or SilentAudio()
        self.rng = rng or random.Random()
        self.effects = Effects(self.rng)

        self.level = 1
        self.lives = self.options.lives
        self.score = 0
        self.level_steps = 0
        self.current_value = 0
        self.target_value = 0
        self.last_bonus = 0

        self.snake: list[Cell] = []
        self.direction: Direction = DIRECTIONS["right"]
        self.next_direction: Direction = DIRECTIONS["right"]
        self.food: list[FoodItem] = []

        self.running = False
        self.level_cleared = False
        self.game_over = False
        self.finished = False
        self.last_update = 0.0
        self.step_interval = self.options.base_speed
        self.events: list[dict] = []

    @property
    def grade(self) -> Optional[str]:
        return self.options.grade

    @property
    def phase(self) -> str:
        if self.finished:
            return "finished"
        if self.game_over:
            return "game_over"
        if self.level_cleared:
            return "level_cleared"
        if self.running:
            return "running"
        return "menu"

    # ── Run control ────────────────────────────────────────────────

    def start_game(self, grade: str):
        if grade not in GRADE_OPERATIONS:
            raise ValueError(f"unknown grade {grade!r}")
        self.options.grade = grade
        self.level = 1
        self.lives = self.options.lives
        self.score = 0
        self.last_bonus = 0
        self.game_over = False
        self.finished = False
        self.start_level(1)
        self.running = True
        logger.info("Game started at grade %s", grade)

    def start_level(self, level: int):
        if self.pending_grid is not None:
            self.grid = self.pending_grid
            self.pending_grid = None
        self.level = level
        self.current_value = 0
        self.level_steps = 0
        self.level_cleared = False
        self.target_value = target_for_level(level, self.rng)
        self._reset_snake()
        self.step_interval = step_interval(level, self.options)
        self.food = []
        self.effects.clear_particles()
        for _ in range(self.options.food_count):
            self.spawn_food()
        logger.debug("Level %d: target %d, interval %dms", level, self.target_value, self.step_interval)

    def next_level(self) -> bool:
        """Leave the level-cleared screen. Returns False if no level was cleared."""
        if not self.level_cleared:
            return False
        self.level_cleared = False
        if self.level < self.options.max_level:
            self.start_level(self.level + 1)
            self.running = True
            return True
        self.finished = True
        self.effects.confetti(self.grid)
        self.audio.play(Sound.WIN)
        self.events.append({"type": "all_complete", "levels": self.options.max_level, "score": self.score})
        logger.info("All %d levels complete, score %d", self.options.max_level, self.score)
        return True

    def restart(self):
        """Back to grade selection with every counter reset."""
        self.running = False
        self.level_cleared = False
        self.game_over = False
        self.finished = False
        self.level = 1
        self.lives = self.options.lives
        self.score = 0
        self.level_steps = 0
        self.current_value = 0
        self.target_value = 0
        self.last_bonus = 0
        self.snake = []
        self.food = []
        self.direction = DIRECTIONS["right"]
        self.next_direction = DIRECTIONS["right"]
        self.effects.clear()
        if self.pending_grid is not None:
            self.grid = self.pending_grid
            self.pending_grid = None

    def resize(self, grid: Grid):
        """Grid changes wait for the next level while a level is being played."""
        if self.running:
            self.pending_grid = grid
        else:
            self.grid = grid
            self.pending_grid = None

    # ── Input ──────────────────────────────────────────────────────

    def stage_direction(self, direction: Union[str, Direction]) -> bool:
        if isinstance(direction, str):
            direction = DIRECTIONS.get(direction)
        if direction not in DIRECTIONS.values():
            return False
        dx, dy = direction
        # No turning straight back into the neck
        if self.direction[0] + dx == 0 and self.direction[1] + dy == 0:
            return False
        self.next_direction = (dx, dy)
        return True

    # ── Simulation ─────────────────────────────────────────────────

    def frame(self, now: float) -> bool:
        """One render frame: at most one step, then always an effects tick."""
        stepped = self.update(now)
        self.effects.tick()
        return stepped

    def update(self, now: float) -> bool:
        if not self.running:
            return False
        if now - self.last_update > self.step_interval:
            # Deaths leave the step clock alone
            if self.step():
                self.last_update = now
            return True
        return False

    def step(self) -> bool:
        """Advance one cell. Returns False if the move killed the snake."""
        self.direction = self.next_direction
        dx, dy = self.direction
        hx, hy = self.snake[0]
        head = (hx + dx, hy + dy)

        if not self.grid.contains(head):
            self.handle_death("wall")
            return False
        if head in self.snake:
            self.handle_death("self")
            return False

        eaten = self.food_at(head)
        self.snake.insert(0, head)
        if eaten is not None:
            self._eat(eaten)
        else:
            self.snake.pop()

        if self.current_value == self.target_value:
            self.handle_level_complete()
        return True

    def food_at(self, cell: Cell) -> Optional[FoodItem]:
        for item in self.food:
            if item.cell == cell:
                return item
        return None

    def _eat(self, item: FoodItem):
        self.current_value = apply_operation(self.current_value, item.op, item.value)
        self.score += self.options.food_reward
        self.level_steps += 1

        self.effects.burst(self.grid, item.cell, item.color)
        self.effects.floating_text(self.grid, item.cell, item.text)
        self.audio.play(Sound.EAT)
        self.events.append({
            "type": "eat",
            "cell": list(item.cell),
            "text": item.text,
            "value": self.current_value,
        })

        self.food.remove(item)
        self.spawn_food()

    def spawn_food(self) -> Optional[FoodItem]:
        return spawn_food(self.grid, self.snake, self.food, self.current_value,
                          self.target_value, self.grade, self.rng)

    def replenish_food(self):
        missing = self.options.food_count - len(self.food)
        for _ in range(missing):
            if self.spawn_food() is None:
                break

    def handle_death(self, cause: str):
        self.lives -= 1
        self.audio.play(Sound.LOSE)
        self.events.append({"type": "death", "cause": cause, "lives": self.lives})

        if self.lives <= 0:
            self.running = False
            self.game_over = True
            self.events.append({"type": "game_over", "level": self.level, "score": self.score})
            logger.info("Game over on level %d with score %d", self.level, self.score)
            return

        logger.debug("Lost a life (%s), %d left", cause, self.lives)
        self._reset_snake()
        occupied = set(self.snake)
        self.food = [item for item in self.food if item.cell not in occupied]
        self.replenish_food()

    def handle_level_complete(self):
        self.running = False
        self.level_cleared = True
        bonus = level_bonus(self.level_steps, self.lives, self.options)
        self.last_bonus = bonus
        self.score += bonus
        self.effects.confetti(self.grid)
        self.audio.play(Sound.LEVEL_COMPLETE)
        self.events.append({
            "type": "level_complete",
            "level": self.level,
            "target": self.target_value,
            "bonus": bonus,
            "steps": self.level_steps,
            "final": self.level >= self.options.max_level,
        })
        logger.info("Level %d cleared in %d steps, bonus %d", self.level, self.level_steps, bonus)

    def _reset_snake(self):
        self.snake = self.grid.spawn_snake()
        self.direction = DIRECTIONS["right"]
        self.next_direction = DIRECTIONS["right"]

    def drain_events(self) -> list[dict]:
        events = self.events
        self.events = []
        return events
