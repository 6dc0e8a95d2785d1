import logging
from typing import Dict, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)

class ConnectionManager:
    """Open task-feed sockets, keyed by the principal they belong to."""

    def __init__(self):
        self.connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, principal_id: str):
        await websocket.accept()
        self.connections.setdefault(principal_id, []).append(websocket)

    def disconnect(self, websocket: WebSocket, principal_id: str):
        sockets = self.connections.get(principal_id)
        if not sockets:
            return
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            del self.connections[principal_id]

    async def send_to(self, principal_id: str, message: dict):
        for connection in list(self.connections.get(principal_id, [])):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("Dropping socket for user=%s: %s", principal_id, e)
                self.disconnect(connection, principal_id)

manager = ConnectionManager()
