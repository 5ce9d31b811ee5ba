"""Admin account routes and the admin-only user and key management routes."""

from fastapi import APIRouter, Depends
from typing import List

from ..errors import (
    AppError,
    AuthenticationError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from ..schemas import (
    AdminCredentials,
    AdminIdentity,
    APIKeyInfo,
    ErrorResponse,
    MessageResponse,
    TokenResponse,
    UserInfo,
)
from ..utils.admins import BAD_CREDENTIALS, AdminManager
from ..utils.auth import APIKeyManager
from ..utils.logging import get_logger
from ..utils.tokens import TokenManager
from ..utils.users import UserManager
from .dependencies import (
    get_admin_manager,
    get_key_manager,
    get_token_manager,
    get_user_manager,
    require_admin,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/admin", tags=["Admin"], responses={500: {"model": ErrorResponse}}
)

_GUARDED = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.post("/create", response_model=MessageResponse)
def create_admin(
    request: AdminCredentials,
    admin_manager: AdminManager = Depends(get_admin_manager),
):
    """Create an admin account."""
    if not request.email or not request.password:
        raise ValidationError("email dan password tidak boleh kosong")

    try:
        admin_manager.create_admin(request.email, request.password)
    except AppError:
        raise
    except Exception:
        logger.exception("create_admin_failed")
        raise ServerError("Gagal membuat admin")

    return MessageResponse(message="Admin berhasil dibuat")


@router.post("/login", response_model=TokenResponse)
def login_admin(
    request: AdminCredentials,
    admin_manager: AdminManager = Depends(get_admin_manager),
    token_manager: TokenManager = Depends(get_token_manager),
):
    """Exchange admin credentials for a bearer token valid for one hour."""
    if not request.email or not request.password:
        raise AuthenticationError(BAD_CREDENTIALS)

    try:
        admin = admin_manager.authenticate(request.email, request.password)
        token = token_manager.create_token(admin.id)
    except AppError:
        raise
    except Exception:
        logger.exception("login_admin_failed")
        raise ServerError("Gagal login admin")

    return TokenResponse(token=token)


@router.get("/users", response_model=List[UserInfo], responses=_GUARDED)
def list_users(
    admin: AdminIdentity = Depends(require_admin),
    user_manager: UserManager = Depends(get_user_manager),
):
    """List every registered user."""
    try:
        users = user_manager.list_users()
    except Exception:
        logger.exception("list_users_failed", admin_id=admin.id)
        raise ServerError("Gagal mengambil data user")

    return [UserInfo.model_validate(user) for user in users]


@router.get("/apikey", response_model=List[APIKeyInfo], responses=_GUARDED)
def list_api_keys(
    admin: AdminIdentity = Depends(require_admin),
    key_manager: APIKeyManager = Depends(get_key_manager),
):
    """List every API key, newest first."""
    try:
        api_keys = key_manager.list_api_keys()
    except Exception:
        logger.exception("list_api_keys_failed", admin_id=admin.id)
        raise ServerError("Gagal mengambil data apikey")

    return [
        APIKeyInfo(
            id=api_key.id,
            api_key=api_key.key,
            status=api_key.status,
            user_id=api_key.user_id,
            expires_at=api_key.outofdate,
        )
        for api_key in api_keys
    ]


@router.delete(
    "/apikey/{key_id}",
    response_model=MessageResponse,
    responses={**_GUARDED, 404: {"model": ErrorResponse}},
)
def revoke_api_key(
    key_id: int,
    admin: AdminIdentity = Depends(require_admin),
    key_manager: APIKeyManager = Depends(get_key_manager),
):
    """Deactivate an API key. Revoking an inactive key succeeds again."""
    try:
        revoked = key_manager.revoke_api_key(key_id)
    except Exception:
        logger.exception(
            "revoke_api_key_failed", api_key_id=key_id, admin_id=admin.id
        )
        raise ServerError("Gagal menonaktifkan apikey")

    if not revoked:
        raise NotFoundError("API Key tidak ditemukan")

    return MessageResponse(message=f"API Key {key_id} dinonaktifkan")
