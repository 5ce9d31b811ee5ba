from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Optional

from ..config import Settings
from ..database import get_db
from ..errors import AuthenticationError, ForbiddenError
from ..schemas import AdminIdentity
from ..utils.admins import AdminManager
from ..utils.auth import APIKeyManager
from ..utils.tokens import TokenManager
from ..utils.users import UserManager

# auto_error=False so a missing or non-bearer header reaches authorize_admin
bearer_scheme = HTTPBearer(
    auto_error=False, description="Admin token from /api/admin/login"
)


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_token_manager(settings: Settings = Depends(get_settings)) -> TokenManager:
    return TokenManager(settings)


def get_key_manager(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> APIKeyManager:
    return APIKeyManager(db, settings)


def get_user_manager(
    db: Session = Depends(get_db),
    key_manager: APIKeyManager = Depends(get_key_manager),
) -> UserManager:
    return UserManager(db, key_manager)


def get_admin_manager(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> AdminManager:
    return AdminManager(db, settings)


def authorize_admin(
    credentials: Optional[HTTPAuthorizationCredentials],
    token_manager: TokenManager,
) -> AdminIdentity:
    """Check a bearer credential and return the admin it identifies.

    Raises AuthenticationError (401) when no bearer token was sent and
    ForbiddenError (403) when the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token tidak ada")

    identity = token_manager.verify_token(credentials.credentials)
    if identity is None:
        raise ForbiddenError("Token tidak valid")

    return identity


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_manager: TokenManager = Depends(get_token_manager),
) -> AdminIdentity:
    """Dependency guarding admin-only routes."""
    return authorize_admin(credentials, token_manager)
