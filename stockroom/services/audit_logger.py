"""
Audit Logger service for the append-only activity log.
"""
import logging
from typing import List, Dict, Any, Optional
from datetime import timedelta
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import utcnow
from stockroom.models.logs import LogEntry

logger = logging.getLogger(__name__)


def serialize_log(entry: LogEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "category": entry.category,
        "message": entry.message,
        "details": entry.details,
        "created_at": entry.created_at,
    }


class AuditLogger:
    """Service for writing and reading audit entries."""

    def record(
        self,
        db: Session,
        category: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> LogEntry:
        """
        Add an audit entry to the session.

        The entry is committed together with the change it describes, so the
        caller owns the commit.
        """
        entry = LogEntry(category=category, message=message, details=details)
        db.add(entry)
        logger.info(f"Audit [{category}] {message}")
        return entry

    async def list_logs(
        self,
        db: Session,
        category: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Get audit entries, newest first, optionally for one category."""
        query = db.query(LogEntry)
        if category:
            query = query.filter(LogEntry.category == category)

        entries = query.order_by(LogEntry.created_at.desc()).limit(limit or settings.logs_limit).all()
        return [serialize_log(entry) for entry in entries]

    async def prune(self, db: Session, older_than_days: int) -> int:
        """Delete entries older than the retention window. Returns the count removed."""
        cutoff = utcnow() - timedelta(days=older_than_days)
        removed = db.query(LogEntry).filter(LogEntry.created_at < cutoff).delete(synchronize_session=False)
        db.commit()
        logger.info(f"Pruned {removed} audit entries older than {older_than_days} days")
        return removed
