"""
Audit log model.
"""
from sqlalchemy import Column, String, DateTime, Text, JSON

from stockroom.core.database import Base, new_id, utcnow


class LogEntry(Base):
    """Append-only audit entry. ``details`` holds category-specific data."""
    __tablename__ = "logs"

    id = Column(String(32), primary_key=True, default=new_id)
    category = Column(String(50), index=True, nullable=False)
    message = Column(Text, nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)

    def __repr__(self):
        return f"<LogEntry(id={self.id}, category='{self.category}')>"
