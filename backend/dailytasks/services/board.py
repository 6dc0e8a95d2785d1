import logging
from typing import Awaitable, Callable, List, Optional, Union

from supabase import AsyncClient

from dailytasks.models.task import Difficulty, Task, TaskStatus
from dailytasks.models.user import Principal
from dailytasks.schemas.task import BoardSnapshot, CategoryDetail, TaskCreate, TaskSummary
from . import aggregation, task_service
from .task_service import TaskId

logger = logging.getLogger(__name__)

class TaskBoard:
    """
    The task list a view renders, plus everything derived from it.

    The board is the only writer of its list. It reloads in full (replace,
    never merge) after a create, a status change, a delete, and whenever the
    principal changes. ``on_change`` is awaited after each of those reloads.

    With ``ownership`` on, nothing reaches the backend until a principal is
    known: the list stays empty and ``create`` refuses.
    """

    def __init__(
        self,
        client: AsyncClient,
        principal: Optional[Principal] = None,
        *,
        ownership: bool = True,
        on_change: Optional[Callable[["TaskBoard"], Awaitable[None]]] = None,
    ):
        self.client = client
        self.principal = principal
        self.ownership = ownership
        self.on_change = on_change
        self.tasks: List[Task] = []
        self.summary = TaskSummary()
        self.loading = False

    @property
    def owner_id(self) -> Optional[str]:
        if not self.ownership or self.principal is None:
            return None
        return self.principal.id

    def _can_query(self) -> bool:
        return not self.ownership or self.principal is not None

    def clear(self) -> None:
        self.tasks = []
        self.summary = TaskSummary()

    async def reload(self) -> List[Task]:
        if not self._can_query():
            self.clear()
            return self.tasks

        self.loading = True
        try:
            # Per-user boards show newest first; the shared board keeps id order.
            self.tasks = await task_service.list_tasks(
                self.client, self.owner_id, newest_first=self.ownership
            )
            self.summary = aggregation.summarize(self.tasks)
        finally:
            self.loading = False
        return self.tasks

    async def _changed(self) -> None:
        await self.reload()
        if self.on_change is not None:
            await self.on_change(self)

    async def set_principal(self, principal: Optional[Principal]) -> None:
        """Session listener: clear on sign-out, reload for a new principal."""
        self.principal = principal
        if principal is None:
            self.clear()
            if self.on_change is not None:
                await self.on_change(self)
            return
        await self._changed()

    def find(self, task_id: TaskId) -> Optional[Task]:
        for task in self.tasks:
            if str(task.id) == str(task_id):
                return task
        return None

    async def open_task(self, task_id: TaskId) -> Optional[Task]:
        if not self._can_query():
            return None
        return await task_service.get_task_by_id(self.client, task_id)

    async def create(self, task: TaskCreate) -> Optional[Task]:
        if not self._can_query():
            logger.warning("Refusing to create a task without a principal")
            return None

        created = await task_service.create_task(self.client, task, self.owner_id)
        if created is not None:
            await self._changed()
        return created

    async def set_status(self, task_id: TaskId, status: TaskStatus) -> Optional[Task]:
        if self.find(task_id) is None:
            return None
        updated = await task_service.update_task_status(self.client, task_id, status)
        await self._changed()
        return updated

    async def toggle(self, task_id: TaskId) -> Optional[Task]:
        task = self.find(task_id)
        if task is None:
            return None
        return await self.set_status(task.id, task.status.toggled())

    async def delete(self, task_id: TaskId) -> bool:
        if not self._can_query():
            return False
        ok = await task_service.delete_task(self.client, task_id)
        if ok:
            await self._changed()
        return ok

    def category(self, name: Union[Difficulty, str]) -> CategoryDetail:
        return aggregation.category_detail(self.tasks, name)

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(tasks=list(self.tasks), summary=self.summary)
