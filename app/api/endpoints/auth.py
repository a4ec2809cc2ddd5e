from fastapi import APIRouter, Depends
import logging

from app.core.deps import get_current_user_token_data, get_login_data, get_token_service, get_users
from app.core.exceptions import InvalidCredentialsError, StoreError
from app.core.security import TokenService
from app.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    UserProfile,
    TokenData,
    RegisterResponse,
    LoginResponse,
    ProfileResponse,
)
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse)
async def register(
    user_data: UserCreate,
    user_service: UserService = Depends(get_users),
    token_service: TokenService = Depends(get_token_service),
):
    """Register a new user and return a session token"""
    user = await user_service.create_user(user_data)

    token = token_service.issue({"user_id": user.id, "email": user.email})

    logger.info(f"User registered successfully: {user.email}")
    return RegisterResponse(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=LoginResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": UserLogin.model_json_schema()}},
        }
    },
)
async def login(
    login_data: UserLogin = Depends(get_login_data),
    user_service: UserService = Depends(get_users),
    token_service: TokenService = Depends(get_token_service),
):
    """Authenticate user and return a session token"""
    user = await user_service.authenticate_user(login_data.email, login_data.password)
    if not user:
        raise InvalidCredentialsError()

    profile = UserProfile.model_validate(user)
    last_login = await user_service.update_last_login(user.id)
    if last_login is not None:
        profile.last_login = last_login

    token = token_service.issue({"user_id": profile.id, "email": profile.email})

    logger.info(f"User logged in successfully: {profile.email}")
    return LoginResponse(user=profile, token=token)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    token_data: TokenData = Depends(get_current_user_token_data),
    user_service: UserService = Depends(get_users),
):
    """Get current user profile"""
    user = await user_service.get_profile(token_data.user_id)
    if user is None:
        # Token outlived its user row
        raise StoreError("Failed to fetch profile")

    return ProfileResponse(user=UserProfile.model_validate(user))
