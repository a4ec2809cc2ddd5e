from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError as PydanticValidationError
from typing import Any, Optional

from app.core.database import get_db
from app.core.exceptions import MissingTokenError, InvalidTokenError, ValidationError
from app.core.logging import get_logger
from app.core.security import PasswordHasher, TokenService
from app.schemas.reading import ReadingCreate
from app.schemas.user import TokenData, UserLogin
from app.services.user_service import UserService, get_user_service
from app.services.reading_service import ReadingService, get_reading_service

logger = get_logger(__name__)

# Missing or non-bearer headers are handled below instead of by FastAPI
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


async def get_current_user_token_data(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenData:
    """Authorization gate for protected routes.

    No bearer token: 401. Token that fails verification: 403. Otherwise the
    decoded claims are attached to ``request.state.user`` and returned.
    """
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request without token", path=request.url.path)
        raise MissingTokenError()

    token_data, error = token_service.verify(credentials.credentials)
    if token_data is None:
        logger.warning("Rejected token", path=request.url.path, reason=error.value if error else None)
        raise InvalidTokenError()

    request.state.user = token_data
    return token_data


def get_users(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return get_user_service(db, hasher)


def get_readings(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> ReadingService:
    return get_reading_service(db, request.app.state.settings.READINGS_LIMIT)


async def read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise ValidationError("Invalid request body")


async def get_reading_data(
    request: Request,
    token_data: TokenData = Depends(get_current_user_token_data),
) -> ReadingCreate:
    """Reading body, parsed only once the token has been accepted"""
    body = await read_json_body(request)
    try:
        return ReadingCreate.model_validate(body)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())


async def get_login_data(request: Request) -> UserLogin:
    """Login body; anything unusable becomes empty credentials and fails as a normal 401"""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    email = body.get("email")
    password = body.get("password")
    return UserLogin(
        email=email if isinstance(email, str) else "",
        password=password if isinstance(password, str) else "",
    )
