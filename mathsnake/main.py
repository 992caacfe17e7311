"""FastAPI application — HTTP routes, WebSocket endpoint."""

import logging
import os
from dataclasses import asdict

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse

from .constants import GRADE_OPERATIONS, SERVER_HOST, SERVER_PORT
from .connection_manager import ConnectionManager
from .models import GameOptions

logger = logging.getLogger(__name__)

app = FastAPI(title="Math Snake")
manager = ConnectionManager()

HTML_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "index.html")


@app.get("/")
async def serve_index():
    return FileResponse(HTML_PATH, media_type="text/html")


@app.get("/options")
async def options():
    return {
        "grades": {grade: ops for grade, ops in GRADE_OPERATIONS.items()},
        "defaults": asdict(GameOptions()),
        "sessions": len(manager.sessions),
    }


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    session = manager.connect(ws, ws.send_text)
    logger.info("Session opened (%d active)", len(manager.sessions))
    try:
        await session.welcome()
        while True:
            raw = await ws.receive_text()
            await session.handle_message(raw)
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(ws)
        logger.info("Session closed (%d active)", len(manager.sessions))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
