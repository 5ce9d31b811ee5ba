from fastapi import APIRouter, Depends

from ..errors import AppError, ServerError, ValidationError
from ..schemas import ErrorResponse, MessageResponse, RegisterRequest
from ..utils.logging import get_logger
from ..utils.users import UserManager
from .dependencies import get_user_manager

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Users"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("/register", response_model=MessageResponse)
def register_user(
    request: RegisterRequest, user_manager: UserManager = Depends(get_user_manager)
):
    """Register a user with the id of an active API key."""
    if not (
        request.firstname and request.lastname and request.email and request.apikey_id
    ):
        raise ValidationError("firstname, lastname, email, apikey_id wajib diisi")

    try:
        user_manager.register_user(
            firstname=request.firstname,
            lastname=request.lastname,
            email=request.email,
            apikey_id=request.apikey_id,
        )
    except AppError:
        raise
    except Exception:
        logger.exception("register_user_failed", api_key_id=request.apikey_id)
        raise ServerError("Gagal mendaftar user")

    return MessageResponse(message="User berhasil dibuat")
