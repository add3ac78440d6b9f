"""
Expense models for one-time and recurring business costs.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, Enum
import enum

from stockroom.core.database import Base, enum_values, new_id, utcnow


class RecurringInterval(enum.Enum):
    """Unit of the repeat interval of a recurring expense."""
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class Expense(Base):
    """Model for expenses.

    A recurring expense repeats every ``recurring_every`` ``recurring_interval``
    units from ``start_date`` until ``end_date`` (open-ended when null).
    """
    __tablename__ = "expenses"

    id = Column(String(32), primary_key=True, default=new_id)
    date = Column(DateTime(timezone=True), nullable=True)
    item = Column(String(200), nullable=False)
    cost = Column(Float, nullable=False)
    quantity = Column(Float, nullable=True)

    # Recurrence
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_interval = Column(Enum(RecurringInterval, values_callable=enum_values, native_enum=False), nullable=True)
    recurring_every = Column(Integer, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Expense(id={self.id}, item='{self.item}', cost={self.cost}, recurring={self.is_recurring})>"
