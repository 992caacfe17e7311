"""Particles and floating labels. Ticked every frame, independent of snake steps."""

import random

from .constants import (
    BURST_PARTICLES, CONFETTI_PARTICLES, PARTICLE_LIFE, CONFETTI_LIFE,
    PARTICLE_DECAY, TEXT_LIFE, TEXT_DECAY, TEXT_DRIFT,
)
from .grid import Grid
from .models import Cell, Particle, FloatingText


class Effects:
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.particles: list[Particle] = []
        self.floating_texts: list[FloatingText] = []

    def _spread(self, scale: float) -> float:
        return (self.rng.random() - 0.5) * scale

    def burst(self, grid: Grid, cell: Cell, color: str, count: int = BURST_PARTICLES):
        x, y = grid.cell_center(cell)
        spread = grid.cell_size / 4
        for _ in range(count):
            self.particles.append(Particle(
                x=x, y=y,
                vx=self._spread(spread), vy=self._spread(spread),
                color=color, life=PARTICLE_LIFE,
            ))

    def floating_text(self, grid: Grid, cell: Cell, text: str):
        px, py = grid.to_pixel(cell)
        self.floating_texts.append(FloatingText(
            x=px + grid.cell_size / 2, y=py,
            text=text, life=TEXT_LIFE, dy=TEXT_DRIFT,
        ))

    def confetti(self, grid: Grid, count: int = CONFETTI_PARTICLES):
        x, y = grid.center()
        spread = grid.cell_size / 2
        for _ in range(count):
            self.particles.append(Particle(
                x=x, y=y,
                vx=self._spread(spread), vy=self._spread(spread),
                color=f"hsl({self.rng.random() * 360:.0f}, 100%, 50%)",
                life=CONFETTI_LIFE,
            ))

    def tick(self):
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= PARTICLE_DECAY
        self.particles = [p for p in self.particles if p.life > 0]

        for ft in self.floating_texts:
            ft.y += ft.dy
            ft.life -= TEXT_DECAY
        self.floating_texts = [ft for ft in self.floating_texts if ft.life > 0]

    def clear_particles(self):
        self.particles.clear()

    def clear(self):
        self.particles.clear()
        self.floating_texts.clear()
