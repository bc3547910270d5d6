"""Versioned document stored as a script's AI analysis."""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class SceneNote(BaseModel):
    """Feedback for a single scene."""
    sceneNumber: int = Field(..., ge=1)
    comment: str
    score: Optional[int] = Field(None, ge=0, le=100)


class ScriptAnalysis(BaseModel):
    """
    Analysis payload attached to a script.

    The version tag is checked on read so a stored document written by an
    incompatible analyzer fails loudly instead of being misread.
    """
    version: Literal[1] = 1
    overallScore: Optional[int] = Field(None, ge=0, le=100)
    verdict: Optional[str] = None
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    scenes: List[SceneNote] = Field(default_factory=list)
    extra: Dict[str, Any] = Field(default_factory=dict)  # Analyzer-specific fields
