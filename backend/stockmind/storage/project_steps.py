"""Project steps storage operations."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from stockmind.models import Project, ProjectStep
from stockmind.storage.base import BaseRepository


class ProjectStepRepository(BaseRepository[ProjectStep]):
    """Saved stage data; one row per (project, step number)."""

    model = ProjectStep

    def list_for_project(self, project_id: str, user_id: str) -> List[ProjectStep]:
        """Steps of a project the user owns, ordered by step number."""
        return (
            self.db.query(ProjectStep)
            .join(Project, Project.id == ProjectStep.project_id)
            .filter(ProjectStep.project_id == project_id, Project.user_id == user_id)
            .order_by(ProjectStep.step_number)
            .all()
        )

    def get_step(self, project_id: str, step_number: int) -> Optional[ProjectStep]:
        return self.db.query(ProjectStep).filter(
            ProjectStep.project_id == project_id,
            ProjectStep.step_number == step_number,
        ).first()

    def upsert_step(
        self,
        project_id: str,
        step_number: int,
        data: Optional[Dict[str, Any]] = None,
        completed_at: Optional[datetime] = None,
        skip_reason: Optional[str] = None,
    ) -> ProjectStep:
        """Save a step, replacing the data of an existing row with the same step number."""
        step = self.get_step(project_id, step_number)
        if step is None:
            return self.create(
                project_id=project_id,
                step_number=step_number,
                data=data,
                completed_at=completed_at,
                skip_reason=skip_reason,
            )

        fields = {"data": data, "completed_at": completed_at}
        if skip_reason is not None:
            fields["skip_reason"] = skip_reason
        return self._apply(step, fields)

    def update_step(self, step_id: str, **fields: Any) -> Optional[ProjectStep]:
        step = self.get_by_id(step_id)
        if step is None:
            return None
        return self._apply(step, fields)
