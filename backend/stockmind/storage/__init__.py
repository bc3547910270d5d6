"""Storage repositories, one per entity family."""
from stockmind.storage.base import BaseRepository
from stockmind.storage.users import UserRepository
from stockmind.storage.projects import ProjectRepository
from stockmind.storage.project_steps import ProjectStepRepository
from stockmind.storage.scripts import ScriptRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProjectRepository",
    "ProjectStepRepository",
    "ScriptRepository",
]
