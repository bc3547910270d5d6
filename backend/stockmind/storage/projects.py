"""Projects storage operations."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func

from stockmind.constants import ProjectStatus
from stockmind.models import Project, ProjectStep, Script
from stockmind.storage.base import BaseRepository
from stockmind.utils.logger import logger


class ProjectRepository(BaseRepository[Project]):
    """
    Projects storage.

    Reads that take a user_id only return the project when that user owns
    it; get_by_id is unscoped and meant for ownership checks and workers.
    """

    model = Project

    def get_project(self, project_id: str, user_id: str) -> Optional[Project]:
        """Get a project by ID with user verification."""
        return self.get_scoped(project_id, user_id)

    def list_for_user(self, user_id: str, include_deleted: bool = False) -> List[Project]:
        """All projects of a user, most recently updated first."""
        query = self.db.query(Project).filter(Project.user_id == user_id)
        if not include_deleted:
            query = query.filter(Project.status != ProjectStatus.DELETED)
        return query.order_by(Project.updated_at.desc(), Project.created_at.desc()).all()

    def create(self, user_id: str, **fields: Any) -> Project:
        return super().create(user_id=user_id, **fields)

    def update(self, project_id: str, user_id: str, **fields: Any) -> Optional[Project]:
        """
        Update a project's fields.

        Moving a trashed project to another status takes it out of the trash,
        so its deletion time is cleared as restore does.
        """
        project = self.get_project(project_id, user_id)
        if project is None:
            return None
        if fields.get("status", ProjectStatus.DELETED) != ProjectStatus.DELETED:
            fields["deleted_at"] = None
        return self._apply(project, fields)

    def soft_delete(self, project_id: str, user_id: str) -> Optional[Project]:
        """Mark the project deleted; it stays restorable until purged."""
        project = self.get_project(project_id, user_id)
        if project is None:
            return None
        return self._apply(project, {"status": ProjectStatus.DELETED, "deleted_at": func.now()})

    def restore(self, project_id: str, user_id: str) -> Optional[Project]:
        """Bring a soft-deleted project back as a draft."""
        project = self.get_project(project_id, user_id)
        if project is None or project.status != ProjectStatus.DELETED:
            return None
        return self._apply(project, {"status": ProjectStatus.DRAFT, "deleted_at": None})

    def permanently_delete(self, project_id: str, user_id: str) -> bool:
        """Delete the project and its steps, detaching any linked scripts."""
        project = self.get_project(project_id, user_id)
        if project is None:
            return False
        try:
            self._remove(project)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Permanently deleted project {project_id}")
        return True

    def create_from_source(
        self,
        user_id: str,
        project_fields: Dict[str, Any],
        step_number: int,
        step_data: Optional[Dict[str, Any]] = None,
    ) -> Project:
        """
        Create a project together with its first saved step.

        Both rows are written in one transaction: either both exist afterwards
        or neither does.
        """
        self._check_fields(project_fields)
        project = Project(user_id=user_id, **project_fields)
        project.steps.append(ProjectStep(step_number=step_number, data=step_data))
        self.db.add(project)
        try:
            self._commit(project)
        except Exception:
            self.db.rollback()
            raise
        return project

    def purge_deleted(self, older_than: datetime) -> int:
        """Permanently delete projects soft-deleted before the cutoff."""
        expired = self.db.query(Project).filter(
            Project.status == ProjectStatus.DELETED,
            Project.deleted_at.isnot(None),
            Project.deleted_at < older_than,
        ).all()

        try:
            for project in expired:
                self._remove(project)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return len(expired)

    def _remove(self, project: Project) -> None:
        self.db.query(Script).filter(Script.project_id == project.id).update(
            {Script.project_id: None}, synchronize_session=False
        )
        # Steps go with the project via the delete-orphan cascade
        self.db.delete(project)
