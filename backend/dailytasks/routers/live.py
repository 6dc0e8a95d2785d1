import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from supabase import AsyncClient

from dailytasks.core.backend import get_socket_backend
from dailytasks.core.errors import InvalidToken
from dailytasks.core.security import decode_access_token
from dailytasks.core.websocket import manager
from dailytasks.services.board import TaskBoard

logger = logging.getLogger(__name__)

router = APIRouter()

@router.websocket("/ws/tasks")
async def task_feed(websocket: WebSocket, client: AsyncClient = Depends(get_socket_backend)):
    """
    Live board for one principal: the current snapshot on connect, then a new
    snapshot after each change that principal makes. Sending "refresh" forces
    a reload.
    """
    try:
        principal = decode_access_token(websocket.query_params.get("token", ""))
    except InvalidToken:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    board = TaskBoard(client, principal)
    await manager.connect(websocket, principal.id)
    logger.info("Task feed connected user=%s", principal.id)
    try:
        await board.reload()
        await websocket.send_json({"type": "tasks", **board.snapshot().model_dump(mode="json")})
        while True:
            data = await websocket.receive_text()
            if data.strip() == "refresh":
                await board.reload()
                await websocket.send_json(
                    {"type": "tasks", **board.snapshot().model_dump(mode="json")}
                )
    except WebSocketDisconnect:
        logger.info("Task feed disconnected user=%s", principal.id)
    finally:
        manager.disconnect(websocket, principal.id)
