"""Scripts library storage operations."""
from typing import Any, List, Optional, Tuple

from sqlalchemy import func, or_

from stockmind.constants import ScriptStatus
from stockmind.models import Script
from stockmind.schemas.analysis import ScriptAnalysis
from stockmind.storage.base import BaseRepository
from stockmind.utils.logger import logger


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def count_words(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    return len(text.split())


class ScriptRepository(BaseRepository[Script]):
    """Scripts library storage; every user-facing read is scoped to the owner."""

    model = Script

    def list_scripts(
        self,
        user_id: str,
        status: Optional[str] = None,
        source_type: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Script], int]:
        """
        Get a page of a user's scripts with optional filters.

        Filters combine with AND. A status or source type of "all" disables
        that filter; search matches title or content, case-insensitively.

        Returns:
            Tuple of (scripts on the requested page, total matching scripts)
        """
        query = self.db.query(Script).filter(Script.user_id == user_id)

        if status and status != ScriptStatus.ALL_FILTER:
            query = query.filter(Script.status == status)

        if source_type and source_type != ScriptStatus.ALL_FILTER:
            query = query.filter(Script.source_type == source_type)

        if search:
            term = f"%{escape_like(search)}%"
            query = query.filter(or_(
                Script.title.ilike(term, escape="\\"),
                Script.content.ilike(term, escape="\\"),
            ))

        total = query.count()
        scripts = (
            query.order_by(Script.updated_at.desc(), Script.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return scripts, total

    def get_script(self, script_id: str, user_id: str) -> Optional[Script]:
        return self.get_scoped(script_id, user_id)

    def create(self, user_id: str, **fields: Any) -> Script:
        if "content" in fields and "word_count" not in fields:
            fields["word_count"] = count_words(fields["content"])
        return super().create(user_id=user_id, **fields)

    def update(self, script_id: str, user_id: str, **fields: Any) -> Optional[Script]:
        script = self.get_script(script_id, user_id)
        if script is None:
            return None
        if "content" in fields and "word_count" not in fields:
            fields["word_count"] = count_words(fields["content"])
        return self._apply(script, fields)

    def delete(self, script_id: str, user_id: str) -> bool:
        script = self.get_script(script_id, user_id)
        if script is None:
            return False
        self.db.delete(script)
        self._commit()
        logger.info(f"Deleted script {script_id}")
        return True

    def get_by_project(self, project_id: str) -> Optional[Script]:
        return self.db.query(Script).filter(Script.project_id == project_id).first()

    def attach_to_project(self, script_id: str, user_id: str, project_id: Optional[str]) -> Optional[Script]:
        """Link a script to a project (in production) or unlink it (ready)."""
        script = self.get_script(script_id, user_id)
        if script is None:
            return None
        status = ScriptStatus.IN_PRODUCTION if project_id else ScriptStatus.READY
        return self._apply(script, {"project_id": project_id, "status": status})

    def record_analysis(self, script_id: str, user_id: str, analysis: ScriptAnalysis) -> Optional[Script]:
        """Store an analysis document and mark the script analyzed."""
        script = self.get_script(script_id, user_id)
        if script is None:
            return None
        return self._apply(script, {
            "ai_analysis": analysis.model_dump(mode="json"),
            "ai_score": analysis.overallScore,
            "analyzed_at": func.now(),
            "status": ScriptStatus.ANALYZED,
        })
