"""Schemas for projects and their steps."""
from pydantic import BaseModel, Field, field_validator, ValidationInfo
from typing import Any, Dict, Literal, Optional

from stockmind.constants import FIRST_STAGE, LAST_STAGE
from stockmind.schemas.common import reject_null
from stockmind.utils.serialization import serialize_datetime

SourceTypeLiteral = Literal["news", "custom", "instagram", "youtube", "audio"]


class ProjectCreate(BaseModel):
    """Request schema for creating a project."""
    title: Optional[str] = Field(None, max_length=255)
    sourceType: SourceTypeLiteral
    sourceData: Optional[Dict[str, Any]] = None
    currentStage: int = Field(FIRST_STAGE, ge=FIRST_STAGE, le=LAST_STAGE)


class ProjectUpdate(BaseModel):
    """Partial update of a project."""
    title: Optional[str] = Field(None, max_length=255)
    sourceData: Optional[Dict[str, Any]] = None
    currentStage: Optional[int] = Field(None, ge=FIRST_STAGE, le=LAST_STAGE)
    status: Optional[Literal["draft", "completed"]] = None

    @field_validator("currentStage", "status")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        return reject_null(value, info)


class StepUpsert(BaseModel):
    """Request schema for saving a project step."""
    data: Optional[Dict[str, Any]] = None
    completed: bool = False
    skipReason: Optional[str] = None


class ProjectFromSource(BaseModel):
    """Create a project and its first step in one transaction."""
    project: ProjectCreate
    stepNumber: int = Field(FIRST_STAGE, ge=FIRST_STAGE, le=LAST_STAGE)
    stepData: Optional[Dict[str, Any]] = None


class ProjectStepResponse(BaseModel):
    id: str
    projectId: str
    stepNumber: int
    data: Optional[Dict[str, Any]] = None
    completedAt: Optional[str] = None
    skipReason: Optional[str] = None
    updatedAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "ProjectStepResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            projectId=obj.project_id,
            stepNumber=obj.step_number,
            data=obj.data,
            completedAt=serialize_datetime(obj.completed_at),
            skipReason=obj.skip_reason,
            updatedAt=serialize_datetime(obj.updated_at),
        )


class ProjectResponse(BaseModel):
    id: str
    userId: str
    title: Optional[str] = None
    sourceType: str
    sourceData: Optional[Dict[str, Any]] = None
    currentStage: int
    status: str
    deletedAt: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "ProjectResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            userId=obj.user_id,
            title=obj.title,
            sourceType=obj.source_type,
            sourceData=obj.source_data,
            currentStage=obj.current_stage,
            status=obj.status,
            deletedAt=serialize_datetime(obj.deleted_at),
            createdAt=serialize_datetime(obj.created_at),
            updatedAt=serialize_datetime(obj.updated_at),
        )
