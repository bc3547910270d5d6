"""User service: registration, lookups and profile updates."""
from typing import Any, Dict, Optional

from stockmind.models import User
from stockmind.storage.users import UserRepository
from stockmind.utils.exceptions import (
    ConstraintViolationError,
    user_already_exists,
    user_not_found_by_email,
    user_not_found_by_id,
)
from stockmind.utils.hashing import hash_password, verify_password
from stockmind.utils.logger import logger
from stockmind.utils.result import Result


class UserService:
    """
    Wraps UserRepository with the account rules.

    Domain failures (duplicate email, unknown id, unknown email) come back as
    a failed Result. Any other store error propagates to the caller.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Result[User]:
        if self.repository.get_by_email(email) is not None:
            return Result.failure(user_already_exists(email))

        try:
            user = self.repository.create(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
            )
        except ConstraintViolationError:
            # Lost a race with a concurrent registration
            if self._email_taken(email):
                return Result.failure(user_already_exists(email))
            raise

        logger.info(f"Registered user {user.id}")
        return Result.success(user)

    def get_by_id(self, user_id: str) -> Result[User]:
        user = self.repository.get_by_id(user_id)
        if user is None:
            return Result.failure(user_not_found_by_id(user_id))
        return Result.success(user)

    def get_by_email(self, email: str) -> Result[User]:
        user = self.repository.get_by_email(email)
        if user is None:
            return Result.failure(user_not_found_by_email(email))
        return Result.success(user)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the password matches, otherwise None."""
        result = self.get_by_email(email)
        if not result.ok:
            return None
        user = result.value
        if not verify_password(password, user.password_hash):
            return None
        return user

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Result[User]:
        """Overwrite profile fields of an existing user."""
        found = self.get_by_id(user_id)
        if not found.ok:
            return found

        new_email = fields.get("email")
        if new_email and new_email != found.value.email:
            if self.repository.get_by_email(new_email) is not None:
                return Result.failure(user_already_exists(new_email))

        try:
            user = self.repository.upsert_user({"id": user_id, **fields})
        except ConstraintViolationError:
            if new_email and self._email_taken(new_email, other_than=user_id):
                return Result.failure(user_already_exists(new_email))
            raise
        return Result.success(user)

    def _email_taken(self, email: str, other_than: Optional[str] = None) -> bool:
        owner = self.repository.get_by_email(email)
        return owner is not None and owner.id != other_than
