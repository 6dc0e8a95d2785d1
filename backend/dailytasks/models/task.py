from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"

    def toggled(self) -> "TaskStatus":
        return TaskStatus.pending if self is TaskStatus.completed else TaskStatus.completed

class Difficulty(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class Task(BaseModel):
    """A row of the remote ``tasks`` table."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str]
    title: str
    description: str = ""
    deadline: Optional[date] = None
    difficulty: Optional[Difficulty] = None
    status: TaskStatus = TaskStatus.pending
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v: Any) -> Any:
        # Rows written by older clients may carry anything here.
        if v in (TaskStatus.pending.value, TaskStatus.completed.value):
            return v
        return TaskStatus.pending

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v: Any) -> Any:
        if v in (Difficulty.low.value, Difficulty.medium.value, Difficulty.high.value):
            return v
        return None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v
