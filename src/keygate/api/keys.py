from fastapi import APIRouter, Depends

from ..errors import ServerError
from ..schemas import APIKeyCreated, ErrorResponse
from ..utils.auth import APIKeyManager
from ..utils.logging import get_logger
from .dependencies import get_key_manager

logger = get_logger(__name__)

router = APIRouter(tags=["API Keys"], responses={500: {"model": ErrorResponse}})


@router.get("/generate-apikey", response_model=APIKeyCreated)
def generate_api_key(key_manager: APIKeyManager = Depends(get_key_manager)):
    """Generate a new API key valid for 30 days."""
    try:
        api_key = key_manager.create_api_key()
    except Exception:
        logger.exception("generate_key_failed")
        raise ServerError("Gagal membuat API key")

    return APIKeyCreated(id=api_key.id, apiKey=api_key.key)
