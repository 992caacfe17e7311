"""Food spawning and the arithmetic each food applies."""

import random
from typing import Iterable, Optional

from .constants import GRADE_OPERATIONS, SPAWN_ATTEMPTS
from .grid import Grid
from .models import Cell, FoodItem

# Solvability heuristic weights
BIAS_CHANCE = 0.6
PRIMARY_CHANCE = 0.7


def available_operations(grade: Optional[str]) -> list[str]:
    return list(GRADE_OPERATIONS.get(grade, ["+", "-"]))


def pick_empty_cell(grid: Grid, occupied: Iterable[Cell], rng: random.Random,
                    attempts: int = SPAWN_ATTEMPTS) -> Optional[Cell]:
    """Random placement, giving up after a fixed number of tries."""
    occupied = set(occupied)
    for _ in range(attempts):
        cell = (rng.randrange(grid.cols), rng.randrange(grid.rows))
        if cell not in occupied:
            return cell
    return None


def choose_operation(current: int, target: int, ops: list[str],
                     rng: random.Random) -> tuple[str, int]:
    """Pick an operator and operand that tend to move `current` toward `target`.

    A zero value always gets "+" so it can never be multiplied or divided
    into a dead end. Otherwise the pick leans toward growing or shrinking
    the value 60% of the time and is uniform the rest.
    """
    op = rng.choice(ops)
    value = rng.randint(1, 9)

    if current == 0:
        op = "+"
    elif current < target and rng.random() < BIAS_CHANCE:
        if rng.random() < PRIMARY_CHANCE:
            op = "+"
        else:
            op = "*" if "*" in ops else "+"
    elif current > target and rng.random() < BIAS_CHANCE:
        if rng.random() < PRIMARY_CHANCE:
            op = "-"
        else:
            op = "/" if "/" in ops else "-"

    # Keep numbers small enough to reason about
    if op == "*":
        value = rng.randint(2, 4)
    elif op == "/":
        value = 2
    return op, value


def spawn_food(grid: Grid, snake: list[Cell], food: list[FoodItem], current: int,
               target: int, grade: Optional[str], rng: random.Random) -> Optional[FoodItem]:
    """Add one food item to `food`, or nothing if no free cell turned up."""
    occupied = set(snake)
    occupied.update(item.cell for item in food)
    cell = pick_empty_cell(grid, occupied, rng)
    if cell is None:
        return None
    op, value = choose_operation(current, target, available_operations(grade), rng)
    item = FoodItem(cell=cell, op=op, value=value)
    food.append(item)
    return item


def apply_operation(current: int, op: str, value: int) -> int:
    if op == "+":
        result = current + value
    elif op == "-":
        result = current - value
    elif op == "*":
        result = current * value
    elif op == "/":
        result = current // value
    else:
        raise ValueError(f"unknown operation {op!r}")
    return max(0, result)
