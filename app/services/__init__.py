from .user_service import UserService, get_user_service
from .reading_service import ReadingService, get_reading_service

__all__ = [
    "UserService", "get_user_service",
    "ReadingService", "get_reading_service"
]
