from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime


class UserCreate(BaseModel):
    """Schema for user registration"""
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=1, max_length=255)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(BaseModel):
    """Schema for user login

    Missing fields are left empty and fail as ordinary bad credentials.
    """
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    """Schema for the user returned on registration"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None


class UserProfile(UserResponse):
    """Schema for user profile (every column except the password hash)"""
    last_login: Optional[datetime] = None
    settings: Dict[str, Any] = Field(default_factory=dict)


class TokenData(BaseModel):
    """Claims carried by a session token"""
    user_id: int
    email: str


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful"
    user: UserResponse
    token: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    user: UserProfile
    token: str


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserProfile
