from .user import (
    UserCreate, UserLogin, UserResponse, UserProfile, TokenData,
    RegisterResponse, LoginResponse, ProfileResponse
)
from .reading import (
    ReadingCreate, ReadingResponse, ReadingsResponse, MessageResponse
)

__all__ = [
    # User schemas
    "UserCreate", "UserLogin", "UserResponse", "UserProfile", "TokenData",
    "RegisterResponse", "LoginResponse", "ProfileResponse",

    # Reading schemas
    "ReadingCreate", "ReadingResponse", "ReadingsResponse", "MessageResponse"
]
