from .user import User
from .reading import Reading

__all__ = ["User", "Reading"]
