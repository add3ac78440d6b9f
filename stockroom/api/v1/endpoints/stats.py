"""
Dashboard statistics API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.stats_reporter import StatsReporter

router = APIRouter()
stats_reporter = StatsReporter()


@router.get("")
async def get_stats(db: Session = Depends(get_db)):
    """
    Get dashboard statistics.

    Returns product and order counts, products bought, total spent and the
    top suppliers by order count. Served from cache when fresh.
    """
    return await stats_reporter.get_stats(db)
