"""Project and project step models."""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.orm import relationship
from stockmind.constants import ProjectStatus, FIRST_STAGE
from stockmind.database import Base
from stockmind.models.types import JSONType, generate_id


class Project(Base):
    """A video project moving through the production stages."""
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    source_type = Column(String(20), nullable=False)  # news|custom|instagram|youtube|audio
    source_data = Column(JSONType, nullable=True)
    current_stage = Column(Integer, default=FIRST_STAGE, nullable=False)  # 1-7
    status = Column(String(20), default=ProjectStatus.DRAFT, nullable=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # Start of the recovery window
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", backref="projects")
    steps = relationship(
        "ProjectStep",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectStep.step_number",
    )


class ProjectStep(Base):
    """Saved progress for one stage of a project."""
    __tablename__ = "project_steps"

    id = Column(String, primary_key=True, default=generate_id)
    project_id = Column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    step_number = Column(Integer, nullable=False)  # 1-7
    data = Column(JSONType, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    skip_reason = Column(String, nullable=True)  # e.g. "custom_voice", "custom_video"
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="steps")

    __table_args__ = (
        Index("project_steps_project_id_idx", "project_id"),
        UniqueConstraint("project_id", "step_number", name="project_steps_project_step_unique"),
    )
