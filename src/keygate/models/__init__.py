"""Database models for keygate."""

from .admin import Admin
from .api_key import ApiKey, ApiKeyStatus
from .user import User

__all__ = ["Admin", "ApiKey", "ApiKeyStatus", "User"]
