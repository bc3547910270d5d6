"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, Query, status

from stockmind.api.deps import get_user_service
from stockmind.schemas.common import ApiResponse
from stockmind.schemas.user import LoginRequest, RegisterRequest, UserResponse
from stockmind.services.users import UserService
from stockmind.utils.exceptions import authentication_error, handle_database_error, user_error_to_http
from stockmind.utils.logger import logger

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    """
    Register a new account.

    Args:
        request: Email, password and optional names
        service: User service

    Returns:
        The created user
    """
    try:
        result = service.register(
            email=request.email,
            password=request.password,
            first_name=request.firstName,
            last_name=request.lastName,
        )
    except Exception as e:
        logger.error(f"Registration failed for {request.email}: {e}", exc_info=True)
        raise handle_database_error(e, "register")

    if not result.ok:
        raise user_error_to_http(result.error)

    return ApiResponse.ok(UserResponse.from_orm(result.value), message="Registration successful")


@router.post("/login", response_model=ApiResponse[UserResponse])
async def login(
    request: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    """
    Check credentials and return the user.

    Unknown emails and wrong passwords get the same answer.
    """
    try:
        user = service.authenticate(request.email, request.password)
    except Exception as e:
        logger.error(f"Login error for {request.email}: {e}", exc_info=True)
        raise authentication_error("Login failed")

    if user is None:
        raise authentication_error("Invalid email or password")

    return ApiResponse.ok(UserResponse.from_orm(user), message="Login successful")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(
    user_id: str = Query(..., description="User ID"),
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    """Current user's profile."""
    try:
        result = service.get_by_id(user_id)
    except Exception as e:
        logger.error(f"Get current user failed for {user_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_me")

    if not result.ok:
        raise user_error_to_http(result.error)

    return ApiResponse.ok(UserResponse.from_orm(result.value))
