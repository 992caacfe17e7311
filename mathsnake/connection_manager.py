"""Per-connection game sessions and state serialization."""

import asyncio
import json
import logging
import random
import time
from dataclasses import asdict
from typing import Awaitable, Callable, Optional

from .audio import QueuedAudio
from .constants import DIRECTIONS, FRAME_RATE, GRADE_OPERATIONS
from .game import GameState
from .grid import calculate_grid

logger = logging.getLogger(__name__)

Sender = Callable[[str], Awaitable[None]]


def _is_size(value) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def build_state_msg(game: GameState, audio: Optional[QueuedAudio] = None) -> str:
    grid = game.grid
    return json.dumps({
        "type": "state",
        "phase": game.phase,
        "grade": game.grade,
        "level": game.level,
        "max_level": game.options.max_level,
        "target": game.target_value,
        "current": game.current_value,
        "lives": game.lives,
        "score": game.score,
        "level_steps": game.level_steps,
        "last_bonus": game.last_bonus,
        "muted": audio.muted if audio else True,
        "grid": {
            "cols": grid.cols,
            "rows": grid.rows,
            "cell_size": grid.cell_size,
            "width": grid.width,
            "height": grid.height,
        },
        "snake": [list(cell) for cell in game.snake],
        "direction": list(game.direction),
        "food": [
            {"x": f.cell[0], "y": f.cell[1], "op": f.op, "value": f.value,
             "text": f.text, "color": f.color}
            for f in game.food
        ],
        "particles": [
            {"x": round(p.x, 1), "y": round(p.y, 1), "life": round(p.life, 2), "color": p.color}
            for p in game.effects.particles
        ],
        "floating_texts": [
            {"x": round(t.x, 1), "y": round(t.y, 1), "life": round(t.life, 2), "text": t.text}
            for t in game.effects.floating_texts
        ],
        "events": game.drain_events(),
        "sounds": audio.drain() if audio else [],
    })


class GameSession:
    """One browser tab: its own game, audio queue and frame loop."""

    def __init__(self, send: Sender, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.send = send
        self.clock = clock
        self.audio = QueuedAudio()
        self.game = GameState(audio=self.audio, rng=rng)
        self.loop_task: Optional[asyncio.Task] = None

    def now(self) -> float:
        return self.clock() * 1000

    async def welcome(self):
        await self.send(json.dumps({
            "type": "welcome",
            "grades": list(GRADE_OPERATIONS),
            "options": asdict(self.game.options),
        }))
        await self.send_state()

    async def send_state(self):
        await self.send(build_state_msg(self.game, self.audio))

    async def handle_message(self, raw: str):
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed message: %.80s", raw)
            return
        if not isinstance(msg, dict):
            return

        kind = msg.get("type")
        if kind == "input":
            d = msg.get("direction")
            if isinstance(d, str) and d in DIRECTIONS:
                self.game.stage_direction(d)
            # The frame loop reports the result
            return

        if kind == "start":
            grade = msg.get("grade")
            if isinstance(grade, str) and grade in GRADE_OPERATIONS:
                self.game.start_game(grade)
                self.ensure_loop()
        elif kind == "next_level":
            if self.game.next_level():
                self.ensure_loop()
        elif kind == "restart":
            self.game.restart()
        elif kind == "mute":
            self.audio.toggle_mute()
        elif kind == "resize":
            width = msg.get("width")
            height = msg.get("height")
            hud = msg.get("hud_height")
            if _is_size(width) and _is_size(height):
                if not _is_size(hud):
                    hud = None
                self.game.resize(calculate_grid(width, height, hud))
        else:
            logger.debug("Unknown message type %r", kind)
            return
        await self.send_state()

    def ensure_loop(self):
        if self.loop_task is None or self.loop_task.done():
            self.loop_task = asyncio.create_task(self.run_loop())

    async def run_loop(self):
        while self.game.running:
            self.game.frame(self.now())
            try:
                await self.send_state()
            except Exception:
                logger.debug("Send failed, stopping frame loop")
                return
            await asyncio.sleep(1 / FRAME_RATE)

    async def close(self):
        if self.loop_task is not None and not self.loop_task.done():
            self.loop_task.cancel()
            try:
                await self.loop_task
            except asyncio.CancelledError:
                pass
        self.loop_task = None


class ConnectionManager:
    def __init__(self):
        self.sessions: dict[object, GameSession] = {}

    def connect(self, conn, send: Sender) -> GameSession:
        session = GameSession(send)
        self.sessions[conn] = session
        return session

    async def disconnect(self, conn):
        session = self.sessions.pop(conn, None)
        if session is not None:
            await session.close()
