from typing import List

from fastapi import APIRouter, Depends

from dailytasks.models.task import Difficulty
from dailytasks.schemas.task import Category, CategoryDetail, HomeView, TaskSummary
from dailytasks.services.board import TaskBoard
from .tasks import get_board

router = APIRouter(tags=["pages"])

@router.get("/home", response_model=HomeView)
async def home(board: TaskBoard = Depends(get_board)):
    """Pending/completed counters plus the full list."""
    return HomeView(
        pending=board.summary.pending,
        completed=board.summary.completed,
        tasks=board.tasks,
    )

@router.get("/stats", response_model=TaskSummary)
async def stats(board: TaskBoard = Depends(get_board)):
    return board.summary

@router.get("/categories", response_model=List[Category])
async def categories(board: TaskBoard = Depends(get_board)):
    return board.summary.categories

@router.get("/categories/{difficulty}", response_model=CategoryDetail)
async def category_detail(difficulty: Difficulty, board: TaskBoard = Depends(get_board)):
    return board.category(difficulty)
