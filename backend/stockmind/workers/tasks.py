"""ARQ background tasks for project housekeeping."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from stockmind.config import settings
from stockmind.database import SessionLocal
from stockmind.storage.projects import ProjectRepository
from stockmind.utils.logger import get_logger

logger = get_logger("worker")


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


async def purge_deleted_projects(
    ctx: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Permanently delete projects whose recovery window has passed.

    A soft-deleted project can be restored for project_recovery_days days;
    after that it is removed together with its steps.

    Args:
        ctx: ARQ context (may carry a "session_factory" override)
        now: Reference time, defaults to the current UTC time

    Returns:
        Dict with count of projects purged
    """
    session_factory = ctx.get("session_factory", SessionLocal)
    cutoff = (now or utc_now()) - timedelta(days=settings.project_recovery_days)
    db = session_factory()

    try:
        purged = ProjectRepository(db).purge_deleted(older_than=cutoff)
        if purged:
            logger.info(f"Purged {purged} projects deleted before {cutoff.isoformat()}")
        return {"success": True, "projects_purged": purged}

    except Exception as e:
        logger.error(f"Failed to purge deleted projects: {e}", exc_info=True)
        return {"success": False, "error": str(e)}

    finally:
        db.close()
