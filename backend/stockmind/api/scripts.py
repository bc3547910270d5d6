"""Scripts library API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from stockmind.api.deps import get_project_repository, get_script_repository
from stockmind.auth.dependencies import get_current_user
from stockmind.config import settings
from stockmind.models import User
from stockmind.schemas.analysis import ScriptAnalysis
from stockmind.schemas.common import ApiResponse, PaginatedResponse, Pagination
from stockmind.schemas.script import ScriptCreate, ScriptProjectLink, ScriptResponse, ScriptUpdate
from stockmind.storage import ProjectRepository, ScriptRepository
from stockmind.utils.exceptions import handle_database_error, not_found_error, validation_error
from stockmind.utils.logger import logger

router = APIRouter(prefix="/api/scripts", tags=["scripts"])

_COLUMNS = {
    "title": "title",
    "content": "content",
    "scenes": "scenes",
    "format": "format",
    "status": "status",
    "durationSeconds": "duration_seconds",
    "sourceType": "source_type",
    "sourceId": "source_id",
    "sourceTitle": "source_title",
    "sourceUrl": "source_url",
    "tags": "tags",
    "notes": "notes",
}


def _to_columns(values: dict) -> dict:
    return {_COLUMNS[name]: value for name, value in values.items()}


@router.get("", response_model=PaginatedResponse[ScriptResponse])
async def list_scripts(
    status: Optional[str] = Query(None, description="Script status or 'all'"),
    source_type: Optional[str] = Query(None, alias="sourceType"),
    search: Optional[str] = Query(None, description="Matches title or content"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_limit, ge=1, le=settings.max_page_limit),
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> PaginatedResponse:
    """
    List the user's scripts, newest first.

    Args:
        status: Filter by status ("all" or omitted for every status)
        source_type: Filter by source type ("all" or omitted for every source)
        search: Case-insensitive substring of title or content
        page: 1-based page number
        limit: Page size

    Returns:
        A page of scripts with pagination metadata
    """
    try:
        items, total = scripts.list_scripts(
            user.id,
            status=status,
            source_type=source_type,
            search=search,
            page=page,
            limit=limit,
        )
    except Exception as e:
        logger.error(f"Failed to list scripts for user {user.id}: {e}", exc_info=True)
        raise handle_database_error(e, "list_scripts")

    return PaginatedResponse(
        data=[ScriptResponse.from_orm(s) for s in items],
        pagination=Pagination.build(total=total, page=page, limit=limit),
    )


@router.post("", response_model=ApiResponse[ScriptResponse])
async def create_script(
    script: ScriptCreate,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> ApiResponse:
    """Add a script to the library."""
    try:
        created = scripts.create(user.id, **_to_columns(script.model_dump()))
        logger.info(f"Created script {created.id} for user {user.id}")
        return ApiResponse.ok(ScriptResponse.from_orm(created))
    except Exception as e:
        logger.error(f"Failed to create script: {e}", exc_info=True)
        raise handle_database_error(e, "create_script")


@router.get("/{script_id}", response_model=ApiResponse[ScriptResponse])
async def get_script(
    script_id: str,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> ApiResponse:
    try:
        script = scripts.get_script(script_id, user.id)
    except Exception as e:
        logger.error(f"Failed to get script {script_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_script")

    if script is None:
        raise not_found_error("Script")
    return ApiResponse.ok(ScriptResponse.from_orm(script))


@router.put("/{script_id}", response_model=ApiResponse[ScriptResponse])
async def update_script(
    script_id: str,
    update: ScriptUpdate,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> ApiResponse:
    """Update the given fields of a script."""
    provided = update.model_dump(exclude_unset=True)
    if not provided:
        raise validation_error("No script fields to update")

    try:
        script = scripts.update(script_id, user.id, **_to_columns(provided))
    except Exception as e:
        logger.error(f"Failed to update script {script_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_script")

    if script is None:
        raise not_found_error("Script")
    return ApiResponse.ok(ScriptResponse.from_orm(script))


@router.delete("/{script_id}", response_model=ApiResponse[None])
async def delete_script(
    script_id: str,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> ApiResponse:
    try:
        deleted = scripts.delete(script_id, user.id)
    except Exception as e:
        logger.error(f"Failed to delete script {script_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_script")

    if not deleted:
        raise not_found_error("Script")
    return ApiResponse.ok(message="Script deleted")


@router.post("/{script_id}/analysis", response_model=ApiResponse[ScriptResponse])
async def save_script_analysis(
    script_id: str,
    analysis: ScriptAnalysis,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
) -> ApiResponse:
    """Attach an analysis document and mark the script analyzed."""
    try:
        script = scripts.record_analysis(script_id, user.id, analysis)
    except Exception as e:
        logger.error(f"Failed to save analysis for script {script_id}: {e}", exc_info=True)
        raise handle_database_error(e, "save_script_analysis")

    if script is None:
        raise not_found_error("Script")
    return ApiResponse.ok(ScriptResponse.from_orm(script))


@router.post("/{script_id}/project", response_model=ApiResponse[ScriptResponse])
async def link_script_project(
    script_id: str,
    link: ScriptProjectLink,
    user: User = Depends(get_current_user),
    scripts: ScriptRepository = Depends(get_script_repository),
    projects: ProjectRepository = Depends(get_project_repository),
) -> ApiResponse:
    """Send a script to production in a project, or take it back with projectId null."""
    if link.projectId is not None and projects.get_project(link.projectId, user.id) is None:
        raise not_found_error("Project")

    try:
        script = scripts.attach_to_project(script_id, user.id, link.projectId)
    except Exception as e:
        logger.error(f"Failed to link script {script_id}: {e}", exc_info=True)
        raise handle_database_error(e, "link_script_project")

    if script is None:
        raise not_found_error("Script")
    return ApiResponse.ok(ScriptResponse.from_orm(script))
