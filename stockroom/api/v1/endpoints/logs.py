"""
Audit log API endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.audit_logger import AuditLogger

router = APIRouter()
audit_logger = AuditLogger()


@router.get("")
async def list_logs(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Get audit entries, newest first, optionally filtered by category."""
    return await audit_logger.list_logs(db, category=category)
