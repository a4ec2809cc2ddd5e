from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext
import logging

from app.core.config import Settings
from app.schemas.user import TokenData

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted bcrypt hashing of user passwords"""

    def __init__(self, settings: Settings):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    def hash(self, password: str) -> str:
        """Generate password hash"""
        try:
            return self.pwd_context.hash(password)
        except Exception as e:
            logger.error(f"Password hashing error: {e}")
            raise

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except Exception as e:
            logger.error(f"Password verification error: {e}")
            return False


class TokenError(str, Enum):
    """Reasons a session token is rejected"""
    EXPIRED = "expired"
    MALFORMED = "malformed"
    SIGNATURE_MISMATCH = "signature_mismatch"


class TokenService:
    """Issues and verifies signed, time-limited session tokens.

    Tokens are HS256 JWTs carrying ``sub`` (the user id), ``email``, ``iat`` and
    ``exp``. Nothing is stored server side; expiry is the only invalidation.
    """

    def __init__(self, settings: Settings):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.lifetime = timedelta(days=settings.JWT_EXPIRE_DAYS)

    def issue(self, claims: Dict[str, Any], issued_at: Optional[datetime] = None) -> str:
        """Create a token for ``{"user_id", "email"}`` valid for the configured lifetime"""
        if issued_at is None:
            issued_at = datetime.now(timezone.utc)

        to_encode = {
            "sub": str(claims["user_id"]),
            "email": claims["email"],
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }

        try:
            return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        except Exception as e:
            logger.error(f"JWT token creation error: {e}")
            raise

    def verify(self, token: str) -> Tuple[Optional[TokenData], Optional[TokenError]]:
        """Verify and decode a token.

        Returns ``(TokenData, None)`` on success and ``(None, reason)`` otherwise.
        The signature is checked before any claim is looked at.
        """
        try:
            jwt.get_unverified_header(token)
        except JWTError:
            return None, TokenError.MALFORMED

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return None, TokenError.EXPIRED
        except JWTClaimsError as e:
            logger.warning(f"JWT claims rejected: {e}")
            return None, TokenError.MALFORMED
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            return None, TokenError.SIGNATURE_MISMATCH

        # jose only checks exp when present
        if "exp" not in payload:
            return None, TokenError.MALFORMED

        user_id = payload.get("sub")
        email = payload.get("email")
        if user_id is None or email is None:
            return None, TokenError.MALFORMED

        try:
            return TokenData(user_id=int(user_id), email=email), None
        except (TypeError, ValueError):
            return None, TokenError.MALFORMED
