"""Crumbling-paper burst shown when an entry is thrown away.

Physics run on a virtual pixel canvas (8x16 pixels per terminal cell) so the
velocities and gravity read the same as on a screen; rendering maps each
particle to the cell it falls in.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass

from rich.console import Console
from rich.live import Live
from rich.text import Text

CELL_WIDTH = 8
CELL_HEIGHT = 16

GRAVITY = 0.2
DECAY = 0.02
SPREAD = 15.0


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    alpha: float
    size: float
    life: float = 1.0

    @property
    def alive(self) -> bool:
        return self.life > 0


class ParticleEffect:
    def __init__(
        self,
        columns: int,
        rows: int,
        *,
        count: int = 150,
        rng: random.Random | None = None,
    ) -> None:
        self.columns = max(1, columns)
        self.rows = max(1, rows)
        self.frame = 0
        rng = rng or random.Random()
        origin_x = self.columns * CELL_WIDTH / 2
        origin_y = self.rows * CELL_HEIGHT / 2
        self.particles = [
            Particle(
                x=origin_x,
                y=origin_y,
                vx=(rng.random() - 0.5) * SPREAD,
                vy=(rng.random() - 0.5) * SPREAD,
                alpha=rng.random() * 0.8 + 0.2,
                size=rng.random() * 3 + 1,
            )
            for _ in range(count)
        ]

    @property
    def done(self) -> bool:
        return not any(p.alive for p in self.particles)

    def step(self) -> bool:
        """Advance one frame. Returns False once nothing was left to move."""
        active = False
        for p in self.particles:
            if not p.alive:
                continue
            active = True
            p.x += p.vx
            p.y += p.vy
            p.vy += GRAVITY
            # rounding keeps fifty decays landing on exactly zero
            p.life = max(0.0, round(p.life - DECAY, 10))
        if active:
            self.frame += 1
        return active

    def render(self) -> Text:
        grid: list[list[tuple[str, str] | None]] = [
            [None] * self.columns for _ in range(self.rows)
        ]
        for p in self.particles:
            if not p.alive:
                continue
            col = int(p.x // CELL_WIDTH)
            row = int(p.y // CELL_HEIGHT)
            if 0 <= col < self.columns and 0 <= row < self.rows:
                glyph = "·" if p.size < 2 else "•" if p.size < 3 else "●"
                level = int(255 * p.alpha * p.life)
                grid[row][col] = (glyph, f"rgb({level},{level},{level})")

        text = Text()
        for r, line in enumerate(grid):
            for cell in line:
                if cell is None:
                    text.append(" ")
                else:
                    text.append(cell[0], style=cell[1])
            if r < self.rows - 1:
                text.append("\n")
        return text

    async def play(self, console: Console, frame_rate: int = 30) -> int:
        """Animate until every particle has decayed, then clear the area."""
        delay = 1 / frame_rate
        with Live(
            self.render(), console=console, refresh_per_second=frame_rate, transient=True
        ) as live:
            while self.step():
                live.update(self.render())
                await asyncio.sleep(delay)
        return self.frame


def burst_for(console: Console, count: int, rng: random.Random | None = None) -> ParticleEffect:
    """Size a burst to the console, leaving room for the prompt line."""
    width, height = console.size
    return ParticleEffect(width, max(1, height - 2), count=count, rng=rng)


__all__ = ["Particle", "ParticleEffect", "burst_for"]
