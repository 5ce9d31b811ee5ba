import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config import Settings
from ..schemas import AdminIdentity
from .logging import get_logger

logger = get_logger(__name__)

ADMIN_ROLE = "admin"


class TokenManager:
    """Manages JWT tokens for admin sessions."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.default_expiry = timedelta(minutes=settings.token_expiry_minutes)

    def create_token(
        self, admin_id: int, expires_in: Optional[timedelta] = None
    ) -> str:
        """Create a signed token for an admin."""
        if expires_in is None:
            expires_in = self.default_expiry

        now = datetime.now(timezone.utc)
        payload = {
            "id": admin_id,
            "role": ADMIN_ROLE,
            "iat": now,
            "exp": now + expires_in,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[AdminIdentity]:
        """Verify and decode a token.

        Returns None for a bad signature, an expired token or a payload
        that does not describe an admin.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("token_expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.info("token_invalid", reason=str(e))
            return None

        admin_id = payload.get("id")
        role = payload.get("role")
        if not isinstance(admin_id, int) or isinstance(admin_id, bool):
            return None
        if role != ADMIN_ROLE:
            return None

        return AdminIdentity(id=admin_id, role=role)
