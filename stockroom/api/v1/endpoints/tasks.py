"""
Task API endpoints for the task board.
"""
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.task_board import TaskBoard

router = APIRouter()
task_board = TaskBoard()


class TaskCreateRequest(BaseModel):
    description: Optional[str] = Field(None, description="Task description; its first line becomes the title")
    priority: Optional[str] = Field(None, description="low, medium or high; defaults to medium")
    due_date: Optional[datetime] = Field(None, description="Due date")


class TaskUpdateRequest(BaseModel):
    """Request model for a partial task update."""
    id: Optional[str] = Field(None, description="Task ID")
    status: Optional[str] = Field(None, description="backlog, in_progress or completed")
    priority: Optional[str] = Field(None, description="low, medium or high")
    description: Optional[str] = Field(None, description="New description")
    due_date: Optional[datetime] = Field(None, description="New due date; null clears it")


@router.get("")
async def list_tasks(db: Session = Depends(get_db)):
    """Get all tasks, newest first."""
    return await task_board.list_tasks(db)


@router.post("", status_code=201)
async def create_task(task: TaskCreateRequest, db: Session = Depends(get_db)):
    """Create a task in the backlog."""
    try:
        return await task_board.create_task(db, task.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("")
async def update_task(task: TaskUpdateRequest, db: Session = Depends(get_db)):
    try:
        return await task_board.update_task(db, task.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("")
async def delete_task(id: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        await task_board.delete_task(db, id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Task deleted successfully"}
