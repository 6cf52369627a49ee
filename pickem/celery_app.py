"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from pickem.config import settings

# Create Celery app
celery_app = Celery(
    "pickem_scoring",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["pickem.tasks.scoring", "pickem.tasks.awards", "pickem.tasks.fantasy"],
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,  # 10 minutes max
    worker_prefetch_multiplier=1,
    task_acks_late=True,
)

# Beat schedule for periodic tasks
celery_app.conf.beat_schedule = {
    # Awards sweep: hourly, picks up weeks whose last game just went final
    "process-completed-weeks": {
        "task": "pickem.tasks.awards.process_completed_weeks",
        "schedule": crontab(minute=15),
    },
    # Scoring audit: Tuesdays at 10am UTC, after Monday night games
    "scoring-audit": {
        "task": "pickem.tasks.scoring.audit_season_scoring",
        "schedule": crontab(minute=0, hour=10, day_of_week="tue"),
        "kwargs": {"fix": True},
    },
}
