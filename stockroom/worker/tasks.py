"""
Celery background tasks for the Stockroom application.
"""
import asyncio
import logging
from datetime import datetime, time, timedelta, timezone

from stockroom.worker.celery import celery
from stockroom.core.config import settings
from stockroom.core.database import get_db_context, utcnow
from stockroom.services.audit_logger import AuditLogger
from stockroom.services.sales_logger import SalesLogger
from stockroom.services.stats_reporter import StatsReporter

logger = logging.getLogger(__name__)


@celery.task(bind=True)
def refresh_stats_cache(self):
    """Recompute the dashboard statistics and refresh their cache entry."""
    try:
        logger.info("Starting stats cache refresh task")

        with get_db_context() as db:
            stats = asyncio.run(StatsReporter().refresh(db))

        return {
            "status": "success",
            "total_products": stats["total_products"],
            "total_orders": stats["total_orders"],
            "timestamp": utcnow().isoformat()
        }

    except Exception as e:
        logger.error(f"Failed to refresh stats cache: {e}")
        raise self.retry(countdown=60, max_retries=3)


@celery.task(bind=True)
def prune_audit_logs(self):
    """Delete audit entries older than the retention window."""
    try:
        logger.info("Starting audit log pruning task")

        with get_db_context() as db:
            removed = asyncio.run(AuditLogger().prune(db, settings.log_retention_days))

        return {
            "status": "success",
            "removed_count": removed,
            "timestamp": utcnow().isoformat()
        }

    except Exception as e:
        logger.error(f"Failed to prune audit logs: {e}")
        raise self.retry(countdown=300, max_retries=3)  # Retry in 5 minutes


@celery.task(bind=True)
def generate_daily_sales_report(self):
    """Summarize yesterday's sales."""
    try:
        logger.info("Starting daily sales report task")

        yesterday = utcnow().date() - timedelta(days=1)
        start_date = datetime.combine(yesterday, time.min, tzinfo=timezone.utc)
        end_date = datetime.combine(yesterday, time.max, tzinfo=timezone.utc)

        with get_db_context() as db:
            summary = asyncio.run(SalesLogger().get_sales_summary(db, start_date, end_date))

        logger.info(
            f"Daily sales report for {yesterday.isoformat()}: "
            f"{summary['total_sales']} sales, {summary['total_revenue']:.2f} revenue"
        )
        return {
            "status": "success",
            "date": yesterday.isoformat(),
            "total_sales": summary["total_sales"],
            "total_revenue": summary["total_revenue"],
            "revenue_by_platform": summary["revenue_by_platform"],
            "generated_at": utcnow().isoformat()
        }

    except Exception as e:
        logger.error(f"Failed to generate daily sales report: {e}")
        raise self.retry(countdown=3600, max_retries=2)  # Retry in 1 hour
