"""ARQ worker configuration."""
from urllib.parse import urlparse

from arq.connections import RedisSettings
from arq.cron import cron

from stockmind.config import settings
from stockmind.database import SessionLocal, engine
from stockmind.utils.logger import get_logger
from stockmind.workers.tasks import purge_deleted_projects

logger = get_logger("worker")


def parse_redis_url(url: str) -> RedisSettings:
    """
    Build RedisSettings from a redis:// or rediss:// URL.

    The database number is taken from the path (/2), defaulting to 0.
    """
    parsed = urlparse(url)
    path = parsed.path.lstrip("/")
    return RedisSettings(
        host=parsed.hostname or "localhost",
        port=parsed.port or 6379,
        password=parsed.password,
        database=int(path) if path else 0,
        ssl=parsed.scheme == "rediss",
    )


async def startup(ctx):
    """Hand the tasks a session factory for the configured database."""
    ctx["session_factory"] = SessionLocal
    logger.info(f"Worker started ({settings.environment}), recovery window {settings.project_recovery_days} days")


async def shutdown(ctx):
    """Release pooled database connections."""
    engine.dispose()
    logger.info("Worker stopped")


class WorkerSettings:
    """ARQ worker settings."""

    functions = [
        purge_deleted_projects,
    ]

    cron_jobs = [
        # Daily at 03:30 UTC; a run catches up on anything a skipped day left behind
        cron(purge_deleted_projects, hour={3}, minute={30}, run_at_startup=False),
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = parse_redis_url(settings.redis_url)

    max_jobs = 1  # Purges must not overlap
    job_timeout = 300
    keep_result = 3600
