"""Gunicorn configuration for the HR administration API."""
import multiprocessing
import os
from datetime import date

from hr_admin.core.config import settings

bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
keepalive = 5
max_requests = 1000
max_requests_jitter = 50

accesslog = "-"
errorlog = "-"
loglevel = settings.LOG_LEVEL.lower()

proc_name = "hr-admin-backend"
preload_app = True


def on_starting(server):
    server.log.info("Starting HR Admin API on %s (database: %s)", bind, settings.DATABASE_URL.split("://")[0])


def when_ready(server):
    # Workers fork from a master that already holds this year's and next year's holidays.
    if settings.HOLIDAY_CACHE_ENABLED:
        from hr_admin.api.dependencies import get_calculator

        calendar = get_calculator().calendar
        this_year = date.today().year
        for year in (this_year, this_year + 1):
            calendar.holidays_for_year(year)
        server.log.info("Holiday calendar warmed for %d-%d", this_year, this_year + 1)
    server.log.info("Server is ready. Listening on: %s", bind)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def worker_abort(worker):
    worker.log.warning("Worker aborted, request exceeded %ss (pid: %s)", timeout, worker.pid)
