"""
Access layer for the remote ``tasks`` table.

Every function here fails soft: a remote error is logged with its traceback and
turned into an empty list, ``None`` or ``False``. Nothing is raised to the
caller, so the view always has something it can render; callers that care
check for the absent value and report a generic failure.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from supabase import AsyncClient

from dailytasks.core.config import settings
from dailytasks.models.task import Task, TaskStatus
from dailytasks.schemas.task import TaskCreate

logger = logging.getLogger(__name__)

TaskId = Union[int, str]

def _table(client: AsyncClient):
    return client.table(settings.TASKS_TABLE)

def _parse(row: Dict[str, Any], op: str) -> Optional[Task]:
    try:
        return Task.model_validate(row)
    except ValidationError:
        logger.exception("Error %s: unreadable row id=%s", op, row.get("id"))
        return None

async def list_tasks(
    client: AsyncClient, owner_id: Optional[str] = None, *, newest_first: bool = True
) -> List[Task]:
    """All tasks (or only ``owner_id``'s), newest first or by ascending id."""
    try:
        query = _table(client).select("*")
        if owner_id:
            query = query.eq("user_id", owner_id)
        if newest_first:
            query = query.order("created_at", desc=True)
        else:
            query = query.order("id")
        response = await query.execute()
    except Exception:
        logger.exception("Error list_tasks owner=%s", owner_id)
        return []

    # One bad row must not blank the whole board.
    tasks = [_parse(row, "list_tasks") for row in response.data or []]
    return [t for t in tasks if t is not None]

async def get_task_by_id(client: AsyncClient, task_id: TaskId) -> Optional[Task]:
    try:
        response = await _table(client).select("*").eq("id", task_id).limit(1).execute()
    except Exception:
        logger.exception("Error get_task_by_id id=%s", task_id)
        return None

    if not response.data:
        logger.info("Task not found id=%s", task_id)
        return None
    return _parse(response.data[0], "get_task_by_id")

async def create_task(
    client: AsyncClient, task: TaskCreate, owner_id: Optional[str] = None
) -> Optional[Task]:
    row = task.to_row()
    if owner_id:
        row["user_id"] = owner_id

    try:
        response = await _table(client).insert(row).execute()
    except Exception:
        logger.exception("Error create_task owner=%s", owner_id)
        return None

    if not response.data:
        logger.error("create_task returned no row owner=%s", owner_id)
        return None
    created = _parse(response.data[0], "create_task")
    if created is None:
        return None
    logger.debug("Task created id=%s owner=%s", created.id, owner_id)
    return created

async def update_task_status(
    client: AsyncClient, task_id: TaskId, status: TaskStatus
) -> Optional[Task]:
    try:
        response = await (
            _table(client).update({"status": status.value}).eq("id", task_id).execute()
        )
    except Exception:
        logger.exception("Error update_task_status id=%s status=%s", task_id, status.value)
        return None

    if not response.data:
        # No row matched: missing id, or one the caller's policies hide.
        logger.error("update_task_status matched no row id=%s", task_id)
        return None
    return _parse(response.data[0], "update_task_status")

async def delete_task(client: AsyncClient, task_id: TaskId) -> bool:
    try:
        await _table(client).delete().eq("id", task_id).execute()
    except Exception:
        logger.exception("Error delete_task id=%s", task_id)
        return False

    logger.debug("Task deleted id=%s", task_id)
    return True
