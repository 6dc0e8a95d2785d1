from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from supabase import AsyncClient

from dailytasks.core.backend import get_backend, oauth2_scheme
from dailytasks.core.config import settings
from dailytasks.core.websocket import manager
from dailytasks.models.task import Task
from dailytasks.models.user import Principal
from dailytasks.schemas.task import TaskCreate, TaskStatusUpdate
from dailytasks.services.board import TaskBoard
from .auth import get_current_principal

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

async def get_task_principal(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[Principal]:
    """The caller, when tasks are owned; nobody in the shared variant."""
    if not settings.OWNERSHIP_ENABLED:
        return None
    return await get_current_principal(token)

async def push_snapshot(board: TaskBoard):
    if board.principal is None:
        return
    payload = board.snapshot().model_dump(mode="json")
    await manager.send_to(board.principal.id, {"type": "tasks", **payload})

async def get_board(
    client: AsyncClient = Depends(get_backend),
    principal: Optional[Principal] = Depends(get_task_principal),
) -> TaskBoard:
    board = TaskBoard(
        client,
        principal,
        ownership=settings.OWNERSHIP_ENABLED,
        on_change=push_snapshot,
    )
    await board.reload()
    return board

def _not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

@router.get("", response_model=List[Task])
async def list_tasks(board: TaskBoard = Depends(get_board)):
    return board.tasks

@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, board: TaskBoard = Depends(get_board)):
    task = await board.open_task(task_id)
    if task is None:
        raise _not_found()
    if board.owner_id is not None and task.user_id != board.owner_id:
        raise _not_found()
    return task

@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(task_in: TaskCreate, board: TaskBoard = Depends(get_board)):
    created = await board.create(task_in)
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to save task")
    return created

@router.post("/{task_id}/toggle", response_model=Task)
async def toggle_task(task_id: str, board: TaskBoard = Depends(get_board)):
    """Flip a task between pending and completed."""
    if board.find(task_id) is None:
        raise _not_found()
    updated = await board.toggle(task_id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to update task")
    return updated

@router.patch("/{task_id}", response_model=Task)
async def update_task_status(
    task_id: str, update: TaskStatusUpdate, board: TaskBoard = Depends(get_board)
):
    if board.find(task_id) is None:
        raise _not_found()
    updated = await board.set_status(task_id, update.status)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to update task")
    return updated

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, board: TaskBoard = Depends(get_board)):
    if board.find(task_id) is None:
        raise _not_found()
    if not await board.delete(task_id):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to delete task")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
