import secrets
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ..config import Settings
from ..models.api_key import ApiKey, ApiKeyStatus
from .datetime import utcnow
from .logging import get_logger

logger = get_logger(__name__)

# 8 random bytes -> 16 hex characters
_TOKEN_BYTES = 8

# Largest id a signed 64-bit INTEGER column can hold
_MAX_KEY_ID = 2**63 - 1


def _is_storable_id(key_id: int) -> bool:
    return 1 <= key_id <= _MAX_KEY_ID


class APIKeyManager:
    """Manages API key creation, validation, listing and revocation."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.prefix = settings.api_key_prefix
        self.ttl = timedelta(days=settings.api_key_ttl_days)

    def generate_api_key(self) -> str:
        """Generate a new API key string."""
        return f"{self.prefix}{secrets.token_hex(_TOKEN_BYTES)}"

    def create_api_key(self) -> ApiKey:
        """Create and persist a new active API key."""
        api_key = ApiKey(
            key=self.generate_api_key(),
            status=ApiKeyStatus.ACTIVE.value,
            outofdate=utcnow() + self.ttl,
        )

        self.db.add(api_key)
        self.db.commit()
        self.db.refresh(api_key)

        logger.info("api_key_created", api_key_id=api_key.id)
        return api_key

    def get_valid_key(self, key_id: int) -> Optional[ApiKey]:
        """Return the key if it is active and not yet expired."""
        if not _is_storable_id(key_id):
            return None

        return (
            self.db.query(ApiKey)
            .filter(
                ApiKey.id == key_id,
                ApiKey.status == ApiKeyStatus.ACTIVE.value,
                ApiKey.outofdate > utcnow(),
            )
            .first()
        )

    def list_api_keys(self) -> List[ApiKey]:
        """All keys, newest first."""
        return self.db.query(ApiKey).order_by(ApiKey.id.desc()).all()

    def revoke_api_key(self, key_id: int) -> bool:
        """Deactivate a key regardless of its current status.

        Returns False when no key has the given id.
        """
        if not _is_storable_id(key_id):
            return False

        matched = (
            self.db.query(ApiKey)
            .filter(ApiKey.id == key_id)
            .update(
                {ApiKey.status: ApiKeyStatus.INACTIVE.value},
                synchronize_session=False,
            )
        )
        self.db.commit()

        if matched:
            logger.info("api_key_revoked", api_key_id=key_id)
        return matched > 0
