"""Schemas for the scripts library."""
from pydantic import BaseModel, Field, field_validator, ValidationInfo
from typing import Any, Dict, List, Literal, Optional

from stockmind.schemas.analysis import ScriptAnalysis
from stockmind.schemas.common import reject_null
from stockmind.utils.serialization import serialize_datetime

StoredScriptStatus = Literal["draft", "analyzed", "ready", "in_production", "completed"]


class ScriptCreate(BaseModel):
    """Request schema for adding a script to the library."""
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    scenes: List[Dict[str, Any]] = Field(default_factory=list)
    format: Optional[str] = None
    status: StoredScriptStatus = "draft"
    durationSeconds: Optional[int] = Field(None, ge=0)
    sourceType: Optional[str] = None
    sourceId: Optional[str] = None
    sourceTitle: Optional[str] = None
    sourceUrl: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class ScriptUpdate(BaseModel):
    """Partial update of a script."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    scenes: Optional[List[Dict[str, Any]]] = None
    format: Optional[str] = None
    status: Optional[StoredScriptStatus] = None
    durationSeconds: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("title", "scenes", "status")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        return reject_null(value, info)


class ScriptProjectLink(BaseModel):
    """Attach a script to a project, or detach it with null."""
    projectId: Optional[str] = None


class ScriptResponse(BaseModel):
    id: str
    userId: str
    title: str
    status: str
    content: Optional[str] = None
    scenes: List[Dict[str, Any]] = Field(default_factory=list)
    format: Optional[str] = None
    durationSeconds: Optional[int] = None
    wordCount: Optional[int] = None
    aiScore: Optional[int] = None
    analysis: Optional[ScriptAnalysis] = None
    sourceType: Optional[str] = None
    sourceId: Optional[str] = None
    sourceTitle: Optional[str] = None
    sourceUrl: Optional[str] = None
    projectId: Optional[str] = None
    version: int = 1
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    analyzedAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "ScriptResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=obj.id,
            userId=obj.user_id,
            title=obj.title,
            status=obj.status,
            content=obj.content,
            scenes=obj.scenes or [],
            format=obj.format,
            durationSeconds=obj.duration_seconds,
            wordCount=obj.word_count,
            aiScore=obj.ai_score,
            analysis=obj.analysis,
            sourceType=obj.source_type,
            sourceId=obj.source_id,
            sourceTitle=obj.source_title,
            sourceUrl=obj.source_url,
            projectId=obj.project_id,
            version=obj.version,
            tags=obj.tags,
            notes=obj.notes,
            createdAt=serialize_datetime(obj.created_at),
            updatedAt=serialize_datetime(obj.updated_at),
            analyzedAt=serialize_datetime(obj.analyzed_at),
        )
