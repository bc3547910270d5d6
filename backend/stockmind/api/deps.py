"""Repository and service dependencies for the routers."""
from fastapi import Depends
from sqlalchemy.orm import Session

from stockmind.database import get_db
from stockmind.services.users import UserService
from stockmind.storage import (
    ProjectRepository,
    ProjectStepRepository,
    ScriptRepository,
    UserRepository,
)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


def get_step_repository(db: Session = Depends(get_db)) -> ProjectStepRepository:
    return ProjectStepRepository(db)


def get_script_repository(db: Session = Depends(get_db)) -> ScriptRepository:
    return ScriptRepository(db)
