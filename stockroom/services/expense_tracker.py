"""
Expense Tracker service for one-time and recurring business costs.
"""
import calendar
import logging
from typing import List, Dict, Any, Optional
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import as_utc, utcnow
from stockroom.core.exceptions import NotFoundError
from stockroom.models.expenses import Expense, RecurringInterval

logger = logging.getLogger(__name__)


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the end of shorter months."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def occurrence_date(start: datetime, interval: RecurringInterval, every: int, n: int) -> datetime:
    """
    Date of the ``n``-th occurrence (0 is the start date).

    Always measured from the start so a clamped month end does not drift
    (Jan 31 -> Feb 28 -> Mar 31).
    """
    steps = every * n
    if interval == RecurringInterval.DAYS:
        return start + timedelta(days=steps)
    if interval == RecurringInterval.WEEKS:
        return start + timedelta(weeks=steps)
    if interval == RecurringInterval.MONTHS:
        return add_months(start, steps)
    return add_months(start, steps * 12)


def occurrences_until(start: datetime, interval: RecurringInterval, every: int, window_end: datetime) -> int:
    """Number of occurrences falling at or before ``window_end``."""
    if window_end < start:
        return 0
    if interval in (RecurringInterval.DAYS, RecurringInterval.WEEKS):
        step_days = every * 7 if interval == RecurringInterval.WEEKS else every
        elapsed = (window_end - start) // timedelta(microseconds=1)
        return elapsed // (step_days * 86400 * 10 ** 6) + 1

    step_months = every * 12 if interval == RecurringInterval.YEARS else every
    months = (window_end.year - start.year) * 12 + window_end.month - start.month
    n = months // step_months
    # Same calendar month as window_end but later in it
    if n > 0 and add_months(start, n * step_months) > window_end:
        n -= 1
    return n + 1


def recurrence_schedule(expense: Expense, as_of: datetime) -> Dict[str, Any]:
    """Occurrences of a recurring expense up to ``as_of`` and the next one due."""
    start = as_utc(expense.start_date)
    end = as_utc(expense.end_date)
    interval = expense.recurring_interval
    every = expense.recurring_every or 1

    window_end = min(end, as_of) if end else as_of
    occurrences = occurrences_until(start, interval, every, window_end)
    try:
        next_date = occurrence_date(start, interval, every, occurrences)
    except (OverflowError, ValueError):
        # Beyond the last representable date
        next_date = None

    if end and next_date and next_date > end:
        next_date = None

    return {
        "id": expense.id,
        "item": expense.item,
        "cost": expense.cost,
        "recurring_interval": interval.value,
        "recurring_every": every,
        "start_date": start,
        "end_date": end,
        "occurrences": occurrences,
        "accrued_cost": occurrences * expense.cost,
        "next_occurrence": next_date,
    }


def summarize_items(expenses: List[Expense]) -> List[Dict[str, Any]]:
    """Group expenses by case-insensitive item name, biggest spend first."""
    groups: Dict[str, List[Expense]] = {}
    for expense in expenses:
        groups.setdefault(expense.item.strip().lower(), []).append(expense)

    summaries = []
    for normalized_name, group in groups.items():
        total_spent = sum(expense.cost for expense in group)
        total_quantity = sum(expense.quantity or 0 for expense in group)
        summaries.append({
            "item_name": group[0].item,
            "normalized_name": normalized_name,
            "total_spent": total_spent,
            "total_quantity": total_quantity,
            "average_price": total_spent / len(group),
            "average_unit_price": total_spent / total_quantity if total_quantity > 0 else None,
            "purchase_count": len(group),
        })
    return sorted(summaries, key=lambda summary: summary["total_spent"], reverse=True)


def serialize_expense(expense: Expense) -> Dict[str, Any]:
    return {
        "id": expense.id,
        "date": expense.date,
        "item": expense.item,
        "cost": expense.cost,
        "quantity": expense.quantity or None,
        "is_recurring": bool(expense.is_recurring),
        "recurring_interval": expense.recurring_interval.value if expense.recurring_interval else None,
        "recurring_every": expense.recurring_every or None,
        "start_date": expense.start_date,
        "end_date": expense.end_date,
        "created_at": expense.created_at,
        "updated_at": expense.updated_at,
    }


class ExpenseTracker:
    """Service for recording expenses and reporting what they add up to."""

    def _get(self, db: Session, expense_id: str) -> Expense:
        expense = db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    def _apply(self, expense: Expense, data: Dict[str, Any]) -> None:
        """Validate ``data`` and write it onto ``expense``, clearing recurrence when not recurring."""
        if not data.get("item") or data.get("cost") is None:
            raise ValueError("Item and cost are required")

        is_recurring = bool(data.get("is_recurring"))
        if is_recurring:
            if not data.get("recurring_interval") or not data.get("recurring_every") or not data.get("start_date"):
                raise ValueError(
                    "Recurring expenses require recurring_interval, recurring_every, and start_date"
                )
            try:
                interval = RecurringInterval(data["recurring_interval"])
            except ValueError:
                raise ValueError(f"Invalid recurring interval: {data['recurring_interval']}")
            every = int(data["recurring_every"])
            if every < 1:
                raise ValueError("recurring_every must be at least 1")

        expense.date = as_utc(data.get("date"))
        expense.item = data["item"]
        expense.cost = float(data["cost"])
        expense.quantity = float(data["quantity"]) if data.get("quantity") else None
        expense.is_recurring = is_recurring

        if is_recurring:
            expense.recurring_interval = interval
            expense.recurring_every = every
            expense.start_date = as_utc(data["start_date"])
            expense.end_date = as_utc(data.get("end_date"))
        else:
            expense.recurring_interval = None
            expense.recurring_every = None
            expense.start_date = None
            expense.end_date = None

    async def list_expenses(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get all expenses, newest first."""
        expenses = db.query(Expense).order_by(Expense.created_at.desc()).limit(limit or settings.list_limit).all()
        return [serialize_expense(expense) for expense in expenses]

    async def get_expense(self, db: Session, expense_id: str) -> Dict[str, Any]:
        return serialize_expense(self._get(db, expense_id))

    async def create_expense(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        expense = Expense()
        self._apply(expense, data)
        db.add(expense)
        db.commit()
        db.refresh(expense)

        logger.info(f"Expense created: {expense.id} ({expense.item}, recurring={expense.is_recurring})")
        return serialize_expense(expense)

    async def update_expense(self, db: Session, expense_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        expense = self._get(db, expense_id)
        self._apply(expense, data)
        expense.updated_at = utcnow()
        db.commit()
        db.refresh(expense)
        return serialize_expense(expense)

    async def delete_expense(self, db: Session, expense_id: str) -> None:
        expense = self._get(db, expense_id)
        db.delete(expense)
        db.commit()
        logger.info(f"Expense deleted: {expense_id}")

    async def get_summary(self, db: Session, as_of: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Summarize recorded expenses.

        Returns the total recorded cost, per-item spend groups and, for every
        recurring expense, its occurrences up to ``as_of`` (default now).
        """
        as_of = as_utc(as_of) or utcnow()
        expenses = db.query(Expense).order_by(Expense.created_at.desc()).all()

        recurring = [
            recurrence_schedule(expense, as_of)
            for expense in expenses
            if expense.is_recurring and expense.recurring_interval and expense.start_date
        ]

        return {
            "as_of": as_of,
            "total_cost": sum(expense.cost for expense in expenses),
            "items": summarize_items(expenses),
            "recurring": recurring,
            "recurring_accrued_cost": sum(schedule["accrued_cost"] for schedule in recurring),
        }
