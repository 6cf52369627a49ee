"""Celery tasks for scoring and awards processing."""
