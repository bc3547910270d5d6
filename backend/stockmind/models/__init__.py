"""Models package."""
from stockmind.models.user import User
from stockmind.models.project import Project, ProjectStep
from stockmind.models.script import Script

__all__ = ["User", "Project", "ProjectStep", "Script"]
