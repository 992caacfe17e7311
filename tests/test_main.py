from fastapi.testclient import TestClient

from mathsnake.main import app


def test_index_served():
    with TestClient(app) as client:
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Math Snake" in resp.text


def test_options():
    with TestClient(app) as client:
        data = client.get("/options").json()
        assert data["grades"]["4"] == ["+", "-", "*", "/"]
        assert data["defaults"]["max_level"] == 20
        assert data["defaults"]["lives"] == 3


def test_websocket_game_starts():
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json()["type"] == "welcome"
            assert ws.receive_json()["phase"] == "menu"
            ws.send_text("garbage")
            ws.send_json({"type": "start", "grade": "1"})
            msg = ws.receive_json()
            assert msg["type"] == "state"
            assert msg["phase"] == "running"
            assert msg["level"] == 1
            assert msg["lives"] == 3
            assert 14 <= msg["target"] <= 18
