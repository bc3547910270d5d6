"""Scripts library model."""
from typing import Optional
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from stockmind.constants import ScriptStatus
from stockmind.database import Base
from stockmind.models.types import JSONType, generate_id
from stockmind.schemas.analysis import ScriptAnalysis


class Script(Base):
    """A script in the user's library, optionally linked to a source and a project."""
    __tablename__ = "scripts_library"

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    status = Column(String(20), default=ScriptStatus.DRAFT, nullable=False, index=True)

    # Content
    content = Column(Text, nullable=True)  # Full voice-over text
    scenes = Column(JSONType, nullable=False, default=list)  # [{sceneNumber, text, start, end, ...}]
    format = Column(String(50), nullable=True)  # news_update, explainer, hook_story, ...
    duration_seconds = Column(Integer, nullable=True)
    word_count = Column(Integer, nullable=True)

    # Analysis
    ai_score = Column(Integer, nullable=True)  # 0-100
    ai_analysis = Column(JSONType, nullable=True)  # ScriptAnalysis document

    # Source
    source_type = Column(String(50), nullable=True)  # rss, reddit, instagram, custom
    source_id = Column(String, nullable=True)
    source_title = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)

    project_id = Column(String, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)

    # Versioning
    version = Column(Integer, default=1, nullable=False)
    parent_script_id = Column(String, ForeignKey("scripts_library.id"), nullable=True)

    tags = Column(JSONType, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    analyzed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="scripts")
    project = relationship("Project")

    __table_args__ = (
        Index("scripts_library_source_idx", "source_type", "source_id"),
        Index("scripts_library_project_idx", "project_id"),
    )

    @property
    def analysis(self) -> Optional[ScriptAnalysis]:
        """Parsed analysis document, or None if the script was never analyzed."""
        if self.ai_analysis is None:
            return None
        return ScriptAnalysis.model_validate(self.ai_analysis)
