"""Projects API endpoints."""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from stockmind.api.deps import get_project_repository, get_step_repository
from stockmind.auth.dependencies import get_current_user
from stockmind.constants import FIRST_STAGE, LAST_STAGE
from stockmind.models import User
from stockmind.schemas.common import ApiResponse
from stockmind.schemas.project import (
    ProjectCreate,
    ProjectFromSource,
    ProjectResponse,
    ProjectStepResponse,
    ProjectUpdate,
    StepUpsert,
)
from stockmind.storage import ProjectRepository, ProjectStepRepository
from stockmind.utils.exceptions import handle_database_error, not_found_error, validation_error
from stockmind.utils.logger import logger

router = APIRouter(prefix="/api/projects", tags=["projects"])

_UPDATE_COLUMNS = {
    "title": "title",
    "sourceData": "source_data",
    "currentStage": "current_stage",
    "status": "status",
}


def _project_fields(project: ProjectCreate) -> dict:
    return {
        "title": project.title,
        "source_type": project.sourceType,
        "source_data": project.sourceData,
        "current_stage": project.currentStage,
    }


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def get_projects(
    include_deleted: bool = Query(False, alias="includeDeleted"),
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """
    Get all projects for a user.

    Soft-deleted projects are left out unless includeDeleted is set.
    """
    try:
        items = projects.list_for_user(user.id, include_deleted=include_deleted)
        return ApiResponse.ok([ProjectResponse.from_orm(p) for p in items])
    except Exception as e:
        logger.error(f"Failed to get projects for user {user.id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_projects")


@router.post("", response_model=ApiResponse[ProjectResponse])
async def create_project(
    project: ProjectCreate,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Create a new project."""
    try:
        created = projects.create(user.id, **_project_fields(project))
        logger.info(f"Created project {created.id} for user {user.id}")
        return ApiResponse.ok(ProjectResponse.from_orm(created))
    except Exception as e:
        logger.error(f"Failed to create project: {e}", exc_info=True)
        raise handle_database_error(e, "create_project")


@router.post("/from-source", response_model=ApiResponse[ProjectResponse])
async def create_project_from_source(
    request: ProjectFromSource,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """
    Create a project from source material together with its first step.

    The project and step are written atomically.
    """
    try:
        created = projects.create_from_source(
            user.id,
            _project_fields(request.project),
            step_number=request.stepNumber,
            step_data=request.stepData,
        )
        logger.info(f"Created project {created.id} from {request.project.sourceType} source")
        return ApiResponse.ok(ProjectResponse.from_orm(created))
    except Exception as e:
        logger.error(f"Failed to create project from source: {e}", exc_info=True)
        raise handle_database_error(e, "create_project_from_source")


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def get_project(
    project_id: str,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """
    Get a specific project.

    A project owned by another user is reported as not found.
    """
    try:
        project = projects.get_project(project_id, user.id)
    except Exception as e:
        logger.error(f"Failed to get project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_project")

    if project is None:
        logger.warning(f"Project {project_id} not found for user {user.id}")
        raise not_found_error("Project")
    return ApiResponse.ok(ProjectResponse.from_orm(project))


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: str,
    update: ProjectUpdate,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Update a project's title, source data, stage or status."""
    provided = update.model_dump(exclude_unset=True)
    if not provided:
        raise validation_error("No project fields to update")
    fields = {_UPDATE_COLUMNS[name]: value for name, value in provided.items()}

    try:
        project = projects.update(project_id, user.id, **fields)
    except Exception as e:
        logger.error(f"Failed to update project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_project")

    if project is None:
        raise not_found_error("Project")
    return ApiResponse.ok(ProjectResponse.from_orm(project))


@router.delete("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def delete_project(
    project_id: str,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Soft delete a project; it can be restored until the recovery window ends."""
    try:
        project = projects.soft_delete(project_id, user.id)
    except Exception as e:
        logger.error(f"Failed to delete project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_project")

    if project is None:
        raise not_found_error("Project")
    return ApiResponse.ok(ProjectResponse.from_orm(project), message="Project moved to trash")


@router.post("/{project_id}/restore", response_model=ApiResponse[ProjectResponse])
async def restore_project(
    project_id: str,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Restore a soft-deleted project."""
    try:
        project = projects.restore(project_id, user.id)
    except Exception as e:
        logger.error(f"Failed to restore project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "restore_project")

    if project is None:
        raise not_found_error("Deleted project")
    return ApiResponse.ok(ProjectResponse.from_orm(project))


@router.delete("/{project_id}/permanent", response_model=ApiResponse[None])
async def permanently_delete_project(
    project_id: str,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Delete a project and all of its steps for good."""
    try:
        deleted = projects.permanently_delete(project_id, user.id)
    except Exception as e:
        logger.error(f"Failed to permanently delete project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "permanently_delete_project")

    if not deleted:
        raise not_found_error("Project")
    return ApiResponse.ok(message="Project deleted successfully")


@router.get("/{project_id}/steps", response_model=ApiResponse[List[ProjectStepResponse]])
async def get_project_steps(
    project_id: str,
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    steps: ProjectStepRepository = Depends(get_step_repository),
) -> ApiResponse:
    """Saved steps of a project, ordered by step number."""
    if projects.get_project(project_id, user.id) is None:
        raise not_found_error("Project")

    try:
        items = steps.list_for_project(project_id, user.id)
        return ApiResponse.ok([ProjectStepResponse.from_orm(s) for s in items])
    except Exception as e:
        logger.error(f"Failed to get steps of project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_project_steps")


@router.put("/{project_id}/steps/{step_number}", response_model=ApiResponse[ProjectStepResponse])
async def save_project_step(
    project_id: str,
    request: StepUpsert,
    step_number: int = Path(..., ge=FIRST_STAGE, le=LAST_STAGE),
    user: User = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repository),
    steps: ProjectStepRepository = Depends(get_step_repository),
) -> ApiResponse:
    """Create or replace the saved data of one step."""
    if projects.get_project(project_id, user.id) is None:
        raise not_found_error("Project")

    try:
        step = steps.upsert_step(
            project_id,
            step_number,
            data=request.data,
            completed_at=datetime.now(timezone.utc) if request.completed else None,
            skip_reason=request.skipReason,
        )
        return ApiResponse.ok(ProjectStepResponse.from_orm(step))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to save step {step_number} of project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "save_project_step")
