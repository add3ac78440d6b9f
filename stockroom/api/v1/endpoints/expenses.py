"""
Expense API endpoints for one-time and recurring expenses.
"""
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.expense_tracker import ExpenseTracker

router = APIRouter()
expense_tracker = ExpenseTracker()


class ExpenseRequest(BaseModel):
    """Request model for creating or replacing an expense."""
    date: Optional[datetime] = Field(None, description="Date of purchase")
    item: Optional[str] = Field(None, description="What was bought")
    cost: Optional[float] = Field(None, description="Total cost")
    quantity: Optional[float] = Field(None, description="Units bought")
    is_recurring: bool = Field(False, description="Whether the expense repeats")
    recurring_interval: Optional[str] = Field(None, description="days, weeks, months or years")
    recurring_every: Optional[int] = Field(None, description="Repeat every N intervals")
    start_date: Optional[datetime] = Field(None, description="First occurrence of a recurring expense")
    end_date: Optional[datetime] = Field(None, description="Last possible occurrence; open-ended when null")


@router.get("")
async def list_expenses(db: Session = Depends(get_db)):
    """Get all expenses, newest first."""
    return await expense_tracker.list_expenses(db)


@router.post("", status_code=201)
async def create_expense(expense: ExpenseRequest, db: Session = Depends(get_db)):
    try:
        return await expense_tracker.create_expense(db, expense.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/summary")
async def get_expense_summary(as_of: Optional[datetime] = None, db: Session = Depends(get_db)):
    """
    Get an expense summary.

    Returns the total recorded cost, spend grouped by item and the accrued
    cost and next occurrence of every recurring expense as of ``as_of``
    (defaults to now).
    """
    return await expense_tracker.get_summary(db, as_of)


@router.get("/{expense_id}")
async def get_expense(expense_id: str, db: Session = Depends(get_db)):
    return await expense_tracker.get_expense(db, expense_id)


@router.put("/{expense_id}")
async def update_expense(expense_id: str, expense: ExpenseRequest, db: Session = Depends(get_db)):
    """Replace an expense; turning recurrence off clears the schedule."""
    try:
        return await expense_tracker.update_expense(db, expense_id, expense.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{expense_id}")
async def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    await expense_tracker.delete_expense(db, expense_id)
    return {"message": "Expense deleted successfully"}
