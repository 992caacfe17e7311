import asyncio
import json
import random

from mathsnake.connection_manager import ConnectionManager, GameSession, build_state_msg
from mathsnake.game import GameState


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


def make_session():
    sent = []

    async def send(text):
        sent.append(json.loads(text))

    session = GameSession(send, rng=random.Random(8), clock=FakeClock())
    return session, sent


def test_state_msg_shape():
    game = GameState(rng=random.Random(1))
    game.start_game("3")
    msg = json.loads(build_state_msg(game))
    assert msg["type"] == "state"
    assert msg["phase"] == "running"
    assert msg["grade"] == "3"
    assert msg["snake"] == [[10, 7], [9, 7], [8, 7]]
    assert msg["grid"] == {"cols": 20, "rows": 15, "cell_size": 40, "width": 800, "height": 600}
    assert len(msg["food"]) == 3
    assert set(msg["food"][0]) == {"x", "y", "op", "value", "text", "color"}
    assert msg["events"] == []
    assert msg["sounds"] == []


def test_welcome_then_start():
    async def scenario():
        session, sent = make_session()
        await session.welcome()
        assert sent[0]["type"] == "welcome"
        assert sent[0]["grades"] == ["1", "2", "3", "4"]
        assert sent[1]["phase"] == "menu"

        await session.handle_message(json.dumps({"type": "start", "grade": "2"}))
        assert session.game.running
        assert session.loop_task is not None
        assert sent[-1]["phase"] == "running"
        await asyncio.sleep(0.05)
        await session.close()
        assert session.loop_task is None

    asyncio.run(scenario())


def test_invalid_messages_ignored():
    async def scenario():
        session, sent = make_session()
        await session.handle_message("not json")
        await session.handle_message(json.dumps([1, 2]))
        await session.handle_message(json.dumps({"type": "start", "grade": "9"}))
        await session.handle_message(json.dumps({"type": "teleport"}))
        await session.handle_message(json.dumps({"type": "input", "direction": ["up"]}))
        await session.handle_message(json.dumps({"type": "input", "direction": {"up": 1}}))
        assert not session.game.running
        assert len(sent) == 1
        assert sent[0]["phase"] == "menu"

    asyncio.run(scenario())


def test_input_staged_without_reply():
    async def scenario():
        session, sent = make_session()
        session.game.start_game("1")
        await session.handle_message(json.dumps({"type": "input", "direction": "up"}))
        await session.handle_message(json.dumps({"type": "input", "direction": "left"}))
        assert session.game.next_direction == (0, -1)
        assert sent == []

    asyncio.run(scenario())


def test_mute_drops_sounds():
    async def scenario():
        session, sent = make_session()
        await session.handle_message(json.dumps({"type": "mute"}))
        assert sent[-1]["muted"] is True
        session.game.start_game("1")
        session.game.lives = 2
        session.game.handle_death("wall")
        await session.send_state()
        assert sent[-1]["sounds"] == []
        assert sent[-1]["events"][0]["type"] == "death"

    asyncio.run(scenario())


def test_sounds_shipped_once():
    async def scenario():
        session, sent = make_session()
        session.game.start_game("1")
        session.game.handle_death("self")
        await session.send_state()
        await session.send_state()
        assert sent[0]["sounds"] == ["lose"]
        assert sent[1]["sounds"] == []

    asyncio.run(scenario())


def test_resize_message():
    async def scenario():
        session, sent = make_session()
        await session.handle_message(json.dumps({"type": "resize", "width": 320, "height": 480}))
        assert sent[-1]["grid"]["cols"] == 8
        assert sent[-1]["grid"]["rows"] == 10
        await session.handle_message(json.dumps({"type": "resize", "width": "wide", "height": 480}))
        assert sent[-1]["grid"]["cols"] == 8

    asyncio.run(scenario())


def test_loop_steps_and_stops_on_game_over():
    async def scenario():
        session, sent = make_session()
        await session.handle_message(json.dumps({"type": "start", "grade": "1"}))
        game = session.game
        game.lives = 1
        game.food = []
        game.snake = [(19, 7), (18, 7), (17, 7)]
        session.clock.t = 10.0
        await asyncio.wait_for(session.loop_task, timeout=1)
        assert game.phase == "game_over"
        assert any(e["type"] == "game_over" for msg in sent for e in msg.get("events", []))

    asyncio.run(scenario())


def test_loop_stops_when_send_fails():
    async def scenario():
        async def send(text):
            raise ConnectionError("gone")

        session = GameSession(send, rng=random.Random(1), clock=FakeClock())
        session.game.start_game("1")
        session.ensure_loop()
        await asyncio.wait_for(session.loop_task, timeout=1)
        assert session.loop_task.done()

    asyncio.run(scenario())


def test_manager_tracks_sessions():
    async def scenario():
        async def send(text):
            pass

        manager = ConnectionManager()
        conn = object()
        session = manager.connect(conn, send)
        assert manager.sessions[conn] is session
        await manager.disconnect(conn)
        assert manager.sessions == {}
        await manager.disconnect(conn)

    asyncio.run(scenario())


def test_resize_rejects_booleans():
    async def scenario():
        session, sent = make_session()
        await session.handle_message(json.dumps({"type": "resize", "width": True, "height": 480}))
        assert session.game.grid.cols == 20
        await session.handle_message(json.dumps({"type": "resize", "width": 320, "height": 480, "hud_height": True}))
        # hud_height falls back to the estimate
        assert (session.game.grid.cols, session.game.grid.rows, session.game.grid.cell_size) == (8, 10, 28)

    asyncio.run(scenario())
