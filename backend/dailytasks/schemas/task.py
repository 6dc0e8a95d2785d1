from datetime import date
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from dailytasks.models.task import Difficulty, Task, TaskStatus

class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    deadline: date
    difficulty: Difficulty = Difficulty.medium
    status: TaskStatus = TaskStatus.pending

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        # Whitespace-only input counts as missing.
        return v.strip() if isinstance(v, str) else v

    def to_row(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "deadline": self.deadline.isoformat(),
            "difficulty": self.difficulty.value,
            "status": self.status.value,
        }

class TaskStatusUpdate(BaseModel):
    status: TaskStatus

class Category(BaseModel):
    name: str
    label: str
    count: int
    color: str

class CategoryDetail(Category):
    tasks: List[Task] = []

class TaskSummary(BaseModel):
    total: int = 0
    pending: int = 0
    completed: int = 0
    completion_percentage: int = 0
    # Strict per-value counts; tasks without a known difficulty are not counted here.
    difficulty_counts: Dict[str, int] = Field(
        default_factory=lambda: {d.value: 0 for d in Difficulty}
    )
    categories: List[Category] = []

class BoardSnapshot(BaseModel):
    tasks: List[Task] = []
    summary: TaskSummary = Field(default_factory=TaskSummary)

class HomeView(BaseModel):
    pending: int
    completed: int
    tasks: List[Task]
