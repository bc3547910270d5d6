# =============================================================================
# tests/test_user_repository.py - User Storage Tests
# =============================================================================
# Covers the generic repository contract through the users table:
# - Lookups by id and email return None on a miss
# - Duplicate emails are rejected by the store
# - Upsert inserts on a new id and overwrites on an existing one
# =============================================================================

import pytest

from stockmind.storage.base import BaseRepository
from stockmind.utils.exceptions import ConstraintViolationError


def _snapshot(user):
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_image_url": user.profile_image_url,
        "created_at": user.created_at,
    }


class TestUserLookups:
    """Tests for id and email lookups."""

    def test_get_by_id_missing_returns_none(self, user_repo):
        """An id with no row gives None, not an error."""
        assert user_repo.get_by_id("no-such-user") is None

    def test_get_by_id_none_returns_none(self, user_repo):
        assert user_repo.get_by_id(None) is None

    def test_create_then_lookup_by_email(self, user_repo):
        """A created user is found by its email with id and timestamps assigned."""
        # Arrange / Act
        created = user_repo.create(email="a@x.com", first_name="Ada")
        found = user_repo.get_by_email("a@x.com")

        # Assert
        assert found is not None
        assert found.id == created.id
        assert found.first_name == "Ada"
        assert found.created_at is not None
        assert found.updated_at is not None

    def test_get_by_email_missing_returns_none(self, user_repo):
        assert user_repo.get_by_email("nobody@x.com") is None

    def test_find_by_unique_field_requires_field(self, db):
        """Repositories without a unique column refuse the lookup."""
        from stockmind.models import Project

        class Projects(BaseRepository):
            model = Project

        with pytest.raises(TypeError, match="Projects does not set unique_field"):
            Projects(db).find_by_unique_field("x")


class TestUserCreate:
    """Tests for inserts and constraint handling."""

    def test_duplicate_email_rejected(self, user_repo):
        """A second account with the same email violates the unique constraint."""
        user_repo.create(email="a@x.com")

        with pytest.raises(ConstraintViolationError) as exc_info:
            user_repo.create(email="a@x.com")

        assert exc_info.value.entity == "User"

    def test_session_usable_after_rejected_write(self, user_repo):
        """The failed transaction is rolled back so the session keeps working."""
        user_repo.create(email="a@x.com")
        with pytest.raises(ConstraintViolationError):
            user_repo.create(email="a@x.com")

        other = user_repo.create(email="b@x.com")

        assert user_repo.get_by_id(other.id) is not None

    def test_unknown_field_rejected(self, user_repo):
        with pytest.raises(ValueError, match="nickname"):
            user_repo.create(email="a@x.com", nickname="ada")


class TestUserUpsert:
    """Tests for insert-or-update keyed by id."""

    def test_upsert_new_id_inserts(self, user_repo):
        user = user_repo.upsert_user({"id": "user-1", "email": "a@x.com"})

        assert user.id == "user-1"
        assert user_repo.get_by_email("a@x.com").id == "user-1"

    def test_upsert_existing_id_overwrites(self, user_repo):
        user_repo.upsert_user({"id": "user-1", "email": "a@x.com", "first_name": "Ada"})

        updated = user_repo.upsert_user({"id": "user-1", "first_name": "Grace"})

        assert updated.first_name == "Grace"
        assert updated.email == "a@x.com"

    def test_upsert_same_payload_twice_is_stable(self, user_repo):
        """Repeating an upsert leaves the row unchanged apart from updated_at."""
        payload = {"id": "user-1", "email": "a@x.com", "first_name": "Ada", "last_name": "L"}

        first = user_repo.upsert_user(payload)
        before = _snapshot(first)
        first_updated_at = first.updated_at

        second = user_repo.upsert_user(payload)

        assert _snapshot(second) == before
        assert second.updated_at >= first_updated_at

    def test_upsert_does_not_mutate_payload(self, user_repo):
        payload = {"id": "user-1", "email": "a@x.com"}
        user_repo.upsert_user(payload)
        user_repo.upsert_user(payload)

        assert payload == {"id": "user-1", "email": "a@x.com"}

    def test_upsert_to_taken_email_rejected(self, user_repo):
        user_repo.create(email="a@x.com")
        other = user_repo.create(email="b@x.com")

        with pytest.raises(ConstraintViolationError):
            user_repo.upsert_user({"id": other.id, "email": "a@x.com"})
