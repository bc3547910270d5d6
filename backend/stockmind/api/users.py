"""User profile endpoints."""
from fastapi import APIRouter, Depends

from stockmind.api.deps import get_user_service
from stockmind.schemas.common import ApiResponse
from stockmind.schemas.user import ProfileUpdate, UserResponse
from stockmind.services.users import UserService
from stockmind.utils.exceptions import handle_database_error, user_error_to_http, validation_error
from stockmind.utils.logger import logger

router = APIRouter(prefix="/api/users", tags=["users"])

_PROFILE_COLUMNS = {
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
    "profileImageUrl": "profile_image_url",
}


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_profile(
    user_id: str,
    update: ProfileUpdate,
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    """
    Update a user's profile fields.

    Only fields present in the request body are written.
    """
    provided = update.model_dump(exclude_unset=True)
    if not provided:
        raise validation_error("No profile fields to update")
    fields = {_PROFILE_COLUMNS[name]: value for name, value in provided.items()}

    try:
        result = service.update_profile(user_id, fields)
    except Exception as e:
        logger.error(f"Failed to update profile of {user_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_profile")

    if not result.ok:
        raise user_error_to_http(result.error)

    return ApiResponse.ok(UserResponse.from_orm(result.value))
