#!/usr/bin/env python3
"""Math Snake server without FastAPI - asyncio + websockets"""

import asyncio
import logging
import os

import websockets
from websockets.datastructures import Headers
from websockets.http11 import Response

from mathsnake.connection_manager import ConnectionManager
from mathsnake.constants import SERVER_HOST, SERVER_PORT

logger = logging.getLogger("mathsnake.server")

manager = ConnectionManager()
html_content = None


def load_html():
    global html_content
    html_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "index.html")
    with open(html_path, "r", encoding="utf-8") as f:
        html_content = f.read()


async def process_request(connection, request):
    # Only serve HTML for non-WebSocket requests
    if "Upgrade" in request.headers and request.headers["Upgrade"].lower() == "websocket":
        return None
    if request.path == "/" or request.path == "/index.html":
        body = html_content.encode()
        return Response(
            200, "OK",
            Headers([
                ("Content-Type", "text/html; charset=utf-8"),
                ("Content-Length", str(len(body))),
                ("Connection", "close"),
            ]),
            body,
        )
    return None


async def handler(websocket):
    session = manager.connect(websocket, websocket.send)
    logger.info("Session opened (%d active)", len(manager.sessions))
    try:
        await session.welcome()
        async for raw in websocket:
            await session.handle_message(raw)
    except websockets.exceptions.ConnectionClosed:
        pass
    finally:
        await manager.disconnect(websocket)
        logger.info("Session closed (%d active)", len(manager.sessions))


async def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    load_html()
    logger.info("Math Snake server starting on http://localhost:%d", SERVER_PORT)

    async with websockets.serve(
        handler,
        SERVER_HOST,
        SERVER_PORT,
        process_request=process_request,
    ):
        await asyncio.Future()


if __name__ == "__main__":
    asyncio.run(main())
