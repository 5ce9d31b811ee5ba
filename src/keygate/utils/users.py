from typing import List

from sqlalchemy.orm import Session

from ..errors import ValidationError
from ..models.api_key import ApiKey
from ..models.user import User
from .auth import APIKeyManager
from .datetime import utctoday
from .logging import get_logger

logger = get_logger(__name__)


class UserManager:
    """Registers users against an API key and lists them."""

    def __init__(self, db: Session, key_manager: APIKeyManager):
        self.db = db
        self.key_manager = key_manager

    def register_user(
        self, firstname: str, lastname: str, email: str, apikey_id: int
    ) -> User:
        """Create a user bound to an active, unexpired API key.

        The key check and the insert are separate statements, so a key
        revoked in between still lets this registration through.
        """
        api_key = self.key_manager.get_valid_key(apikey_id)
        if api_key is None:
            logger.info("registration_rejected", api_key_id=apikey_id)
            raise ValidationError("API Key tidak valid")

        user = User(
            firstname=firstname,
            lastname=lastname,
            email=email,
            start_date=utctoday(),
            last_date=None,
            apikey=api_key.id,
        )
        self.db.add(user)
        self.db.flush()

        if api_key.user_id is None:
            self.db.query(ApiKey).filter(
                ApiKey.id == api_key.id, ApiKey.user_id.is_(None)
            ).update({ApiKey.user_id: user.id}, synchronize_session=False)

        self.db.commit()
        self.db.refresh(user)

        logger.info("user_registered", user_id=user.id, api_key_id=api_key.id)
        return user

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()
