"""Generic repository over a single table."""
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockmind.utils.db import get_by_field, get_by_id, get_scoped
from stockmind.utils.exceptions import ConstraintViolationError
from stockmind.utils.logger import logger

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """
    Typed CRUD surface for one model.

    The session is passed in by the caller; repositories never open or
    close it. Every public method issues one commit at most.
    """

    model: Type[ModelT]
    scope_field: str = "user_id"
    unique_field: Optional[str] = None

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, id_value: Any) -> Optional[ModelT]:
        """Primary-key lookup. Returns None when no row matches."""
        return get_by_id(self.db, self.model, id_value)

    def get_scoped(self, id_value: Any, owner_id: Any) -> Optional[ModelT]:
        """Primary-key lookup restricted to the owner; None if owned by someone else."""
        return get_scoped(self.db, self.model, id_value, self.scope_field, owner_id)

    def find_by_unique_field(self, value: Any) -> Optional[ModelT]:
        """Point lookup on the model's unique non-primary column."""
        if self.unique_field is None:
            raise TypeError(f"{type(self).__name__} does not set unique_field for {self.model.__name__}")
        return get_by_field(self.db, self.model, self.unique_field, value)

    def create(self, **fields: Any) -> ModelT:
        """Insert a row and return it with server-assigned id and timestamps."""
        self._check_fields(fields)
        instance = self.model(**fields)
        self.db.add(instance)
        self._commit(instance)
        return instance

    def upsert(self, fields: Dict[str, Any]) -> ModelT:
        """
        Insert when the primary key is absent, otherwise overwrite the given fields.

        The update timestamp is refreshed on every update, even when no other
        field changed.
        """
        fields = dict(fields)
        self._check_fields(fields)
        id_value = fields.get("id")
        instance = self.get_by_id(id_value) if id_value is not None else None

        if instance is None:
            return self.create(**fields)

        fields.pop("id")
        for name, value in fields.items():
            setattr(instance, name, value)
        instance.updated_at = func.now()
        self._commit(instance)
        return instance

    def _apply(self, instance: ModelT, fields: Dict[str, Any]) -> ModelT:
        """Assign fields, bump updated_at and persist."""
        self._check_fields(fields)
        for name, value in fields.items():
            setattr(instance, name, value)
        instance.updated_at = func.now()
        self._commit(instance)
        return instance

    def _check_fields(self, fields: Dict[str, Any]) -> None:
        columns = self.model.__table__.columns.keys()
        unknown = sorted(set(fields) - set(columns))
        if unknown:
            raise ValueError(f"Unknown {self.model.__name__} fields: {', '.join(unknown)}")

    def _commit(self, instance: Optional[ModelT] = None) -> None:
        """Commit the session, translating constraint failures."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"{self.model.__name__} write rejected by store: {e.orig}")
            raise ConstraintViolationError(self.model.__name__, str(e.orig)) from e
        if instance is not None:
            self.db.refresh(instance)
