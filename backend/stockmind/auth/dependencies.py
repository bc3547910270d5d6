"""Resolve the calling user for protected endpoints."""
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from stockmind.database import get_db
from stockmind.models import User
from stockmind.storage.users import UserRepository
from stockmind.utils.exceptions import authentication_error


def get_current_user(
    user_id: str = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> User:
    """
    Look up the user making the request.

    Session cookies are handled upstream; by the time a request reaches this
    service the caller is identified by user_id.

    Raises:
        HTTPException: 401 if the user does not exist
    """
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise authentication_error("Unknown user")
    return user
