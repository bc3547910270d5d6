"""User storage operations."""
from typing import Any, Dict, Optional

from stockmind.models import User
from stockmind.storage.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Users table: lookups by id and email, create and upsert."""

    model = User
    scope_field = "id"
    unique_field = "email"

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_by_unique_field(email)

    def upsert_user(self, fields: Dict[str, Any]) -> User:
        """Insert or update a user keyed by id (never by email)."""
        return self.upsert(fields)
