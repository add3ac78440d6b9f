"""
Celery configuration for background task processing.
"""
from celery import Celery
from stockroom.core.config import settings

# Create Celery app
celery = Celery(
    "stockroom",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["stockroom.worker.tasks"]
)

# Celery configuration
celery.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=30 * 60,  # 30 minutes
    task_soft_time_limit=25 * 60,  # 25 minutes
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=1000,
    result_expires=3600,  # 1 hour
    beat_schedule={
        "refresh-stats-cache": {
            "task": "stockroom.worker.tasks.refresh_stats_cache",
            "schedule": float(settings.stats_cache_ttl),
        },
        "prune-audit-logs": {
            "task": "stockroom.worker.tasks.prune_audit_logs",
            "schedule": 86400.0,  # Every 24 hours
        },
        "generate-daily-sales-report": {
            "task": "stockroom.worker.tasks.generate_daily_sales_report",
            "schedule": 86400.0,  # Every 24 hours
        }
    }
)

if __name__ == "__main__":
    celery.start()
