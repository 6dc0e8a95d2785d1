"""Derived views over an already-fetched task list. Pure; no remote calls."""

from typing import Dict, Iterable, List, Optional, Sequence, Union

from dailytasks.models.task import Difficulty, Task, TaskStatus
from dailytasks.schemas.task import Category, CategoryDetail, TaskSummary

DIFFICULTY_COLORS: Dict[str, str] = {
    Difficulty.high.value: "#ef4444",
    Difficulty.medium.value: "#f59e0b",
    Difficulty.low.value: "#3b82f6",
}

DIFFICULTY_LABELS: Dict[str, str] = {
    Difficulty.low.value: "Low",
    Difficulty.medium.value: "Medium",
    Difficulty.high.value: "High",
}

def _key(difficulty: Optional[Union[Difficulty, str]]) -> str:
    if difficulty is None:
        return Difficulty.low.value
    return difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)

def difficulty_color(name: Optional[Union[Difficulty, str]]) -> str:
    return DIFFICULTY_COLORS.get(_key(name), DIFFICULTY_COLORS[Difficulty.low.value])

def format_difficulty(name: Optional[Union[Difficulty, str]]) -> str:
    if name is None or name == "":
        return "-"
    key = _key(name)
    return DIFFICULTY_LABELS.get(key, key)

def completion_percentage(completed: int, total: int) -> int:
    """round(100 * completed / total), halves rounded up; 0 for an empty list."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)

def group_by_difficulty(tasks: Iterable[Task]) -> List[Category]:
    """
    Bucket tasks by difficulty.

    Buckets come out in the order their key is first seen. Tasks without a
    known difficulty land in the "low" bucket.
    """
    buckets: Dict[str, Category] = {}
    for task in tasks:
        key = _key(task.difficulty)
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = Category(
                name=key, label=format_difficulty(key), count=1, color=difficulty_color(key)
            )
        else:
            bucket.count += 1
    return list(buckets.values())

def tasks_in_category(tasks: Iterable[Task], name: Union[Difficulty, str]) -> List[Task]:
    key = _key(name)
    return [t for t in tasks if _key(t.difficulty) == key]

def category_detail(tasks: Iterable[Task], name: Union[Difficulty, str]) -> CategoryDetail:
    key = _key(name)
    matching = tasks_in_category(tasks, key)
    return CategoryDetail(
        name=key,
        label=format_difficulty(key),
        count=len(matching),
        color=difficulty_color(key),
        tasks=matching,
    )

def summarize(tasks: Sequence[Task]) -> TaskSummary:
    completed = sum(1 for t in tasks if t.status is TaskStatus.completed)
    pending = sum(1 for t in tasks if t.status is TaskStatus.pending)
    total = len(tasks)

    counts = {d.value: 0 for d in Difficulty}
    for t in tasks:
        if t.difficulty is not None:
            counts[t.difficulty.value] += 1

    return TaskSummary(
        total=total,
        pending=pending,
        completed=completed,
        completion_percentage=completion_percentage(completed, total),
        difficulty_counts=counts,
        categories=group_by_difficulty(tasks),
    )
