"""Custom exceptions and error handling utilities."""
import enum
from fastapi import HTTPException, status
from typing import Optional


class AppException(Exception):
    """Base exception for application errors."""
    pass


class ConstraintViolationError(AppException):
    """Raised by a repository when the store rejects a write on a constraint."""

    def __init__(self, entity: str, detail: str):
        super().__init__(f"{entity} violates a store constraint: {detail}")
        self.entity = entity
        self.detail = detail


class ErrorKind(str, enum.Enum):
    """Domain error kinds reported by the user service."""
    DUPLICATE = "duplicate"
    NOT_FOUND_BY_ID = "not_found_by_id"
    NOT_FOUND_BY_EMAIL = "not_found_by_email"


_MESSAGES = {
    ErrorKind.DUPLICATE: "User with email {key} already exists",
    ErrorKind.NOT_FOUND_BY_ID: "User with id {key} not found",
    ErrorKind.NOT_FOUND_BY_EMAIL: "User with email {key} not found",
}


class UserError(AppException):
    """A user-domain failure carrying its kind and the offending key (id or email)."""

    def __init__(self, kind: ErrorKind, key: str):
        super().__init__(_MESSAGES[kind].format(key=key))
        self.kind = kind
        self.key = key

    @property
    def message(self) -> str:
        return str(self)


def user_already_exists(email: str) -> UserError:
    return UserError(ErrorKind.DUPLICATE, email)


def user_not_found_by_id(user_id: str) -> UserError:
    return UserError(ErrorKind.NOT_FOUND_BY_ID, user_id)


def user_not_found_by_email(email: str) -> UserError:
    return UserError(ErrorKind.NOT_FOUND_BY_EMAIL, email)


def handle_database_error(error: Exception, operation: str) -> HTTPException:
    """
    Convert database errors to HTTP exceptions.

    Args:
        error: The database error
        operation: Description of the operation that failed

    Returns:
        HTTPException with appropriate status code
    """
    if isinstance(error, ConstraintViolationError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Resource already exists: {operation}",
        )

    error_message = str(error)

    # Handle common database errors
    if "not found" in error_message.lower() or "does not exist" in error_message.lower():
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Resource not found: {operation}",
        )

    if "duplicate" in error_message.lower() or "unique" in error_message.lower():
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Resource already exists: {operation}",
        )

    # Default to 500 for unknown database errors
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Database error during {operation}: {error_message}",
    )


def user_error_to_http(error: UserError) -> HTTPException:
    """
    Map a user-domain error to its HTTP status.

    Args:
        error: The domain error returned by the service

    Returns:
        HTTPException with 409 for duplicates and 404 for lookup misses
    """
    if error.kind == ErrorKind.DUPLICATE:
        return conflict_error(error.message)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)


def not_found_error(resource: str, identifier: Optional[str] = None) -> HTTPException:
    """
    Create a standardized 404 error.

    Args:
        resource: Name of the resource (e.g., "Script", "Project")
        identifier: Optional identifier that was not found

    Returns:
        HTTPException with 404 status
    """
    message = f"{resource} not found"
    if identifier:
        message += f": {identifier}"
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def validation_error(message: str) -> HTTPException:
    """
    Create a standardized 400 validation error.

    Args:
        message: Validation error message

    Returns:
        HTTPException with 400 status
    """
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def authentication_error(message: str = "Invalid credentials") -> HTTPException:
    """
    Create a standardized 401 authentication error.

    Args:
        message: Authentication error message

    Returns:
        HTTPException with 401 status
    """
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=message)


def conflict_error(message: str) -> HTTPException:
    """Create a standardized 409 conflict error."""
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
