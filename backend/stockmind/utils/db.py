"""Database query utility functions."""
from typing import Any, Optional, Type, TypeVar
from sqlalchemy.orm import Session

T = TypeVar("T")


def get_by_id(db: Session, model: Type[T], id_value: Any) -> Optional[T]:
    """
    Get a model instance by primary key.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: Primary key value

    Returns:
        Model instance, or None when no row matches
    """
    if id_value is None:
        return None
    return db.get(model, id_value)


def get_by_field(db: Session, model: Type[T], field_name: str, field_value: Any) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    return db.query(model).filter(field == field_value).first()


def get_scoped(db: Session, model: Type[T], id_value: Any, scope_field: str, scope_value: Any) -> Optional[T]:
    """
    Get a model instance by primary key restricted to a scope (e.g. owning user).

    A row that exists under a different scope is reported as missing.
    """
    scope = getattr(model, scope_field)
    return db.query(model).filter(model.id == id_value, scope == scope_value).first()
