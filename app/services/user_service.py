from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from datetime import datetime
from typing import Optional
import logging

from app.models.user import User
from app.schemas.user import UserCreate
from app.core.exceptions import DuplicateEmailError, StoreError, ValidationError
from app.core.security import PasswordHasher

logger = logging.getLogger(__name__)


def _constraint_detail(error: IntegrityError) -> Optional[str]:
    """Pull the driver's constraint detail (e.g. asyncpg's ``Key (email)=(...) already exists.``)"""
    orig = getattr(error, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        detail = getattr(candidate, "detail", None)
        if detail:
            return detail
    return None


class UserService:
    """Service layer for user operations"""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def create_user(self, user_data: UserCreate) -> User:
        """Create a new user.

        Uniqueness of the email is left to the database constraint so that
        concurrent registrations race there and the loser gets DuplicateEmailError.
        """
        if not all([user_data.email, user_data.first_name, user_data.last_name, user_data.password]):
            raise ValidationError()

        # bcrypt is CPU bound; keep it off the event loop
        password_hash = await run_in_threadpool(self.hasher.hash, user_data.password)

        db_user = User(
            email=user_data.email,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            password_hash=password_hash,
            settings={},
        )

        try:
            self.db.add(db_user)
            await self.db.commit()
            await self.db.refresh(db_user)
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"User creation rejected - integrity error for {user_data.email}")
            raise DuplicateEmailError(_constraint_detail(e))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User creation failed: {e}")
            raise StoreError("Registration failed")

        logger.info(f"User created successfully: {user_data.email}")
        return db_user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID"""
        try:
            stmt = select(User).where(User.id == user_id)
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting user by ID {user_id}: {e}")
            raise StoreError("Failed to fetch profile")

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (exact, case-sensitive match)"""
        try:
            stmt = select(User).where(User.email == email)
            result = await self.db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting user by email {email}: {e}")
            raise StoreError("Login failed")

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Return the user when email and password match, otherwise None"""
        if not email or not password:
            return None

        user = await self.get_user_by_email(email)
        if not user:
            return None

        if not await run_in_threadpool(self.hasher.verify, password, user.password_hash):
            return None

        logger.info(f"User authenticated successfully: {email}")
        return user

    async def update_last_login(self, user_id: int) -> Optional[datetime]:
        """Stamp last_login and return it; failures are logged and never fail the login"""
        try:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(last_login=func.now())
                .returning(User.last_login)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            last_login = result.scalar_one_or_none()
            await self.db.commit()
            return last_login
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Failed to update last login for user {user_id}: {e}")
            return None

    async def get_profile(self, user_id: int) -> Optional[User]:
        """Get the user behind a token; the caller serializes without the hash"""
        return await self.get_user_by_id(user_id)


def get_user_service(db: AsyncSession, hasher: PasswordHasher) -> UserService:
    """Build a user service for the request's session"""
    return UserService(db, hasher)
