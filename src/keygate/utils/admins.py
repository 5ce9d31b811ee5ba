"""Admin accounts: creation and credential checks."""

from functools import lru_cache

from sqlalchemy.orm import Session

from ..config import Settings
from ..database import UniqueViolationError, commit
from ..errors import AuthenticationError, ConflictError
from ..models.admin import Admin
from .logging import get_logger
from .passwords import hash_password, verify_password

logger = get_logger(__name__)

BAD_CREDENTIALS = "Email atau password salah"


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> str:
    """Hash checked against when the email is unknown.

    Both login branches then cost one bcrypt verify. Built once at startup.
    """
    return hash_password("keygate-dummy-password", rounds=rounds)


class AdminManager:
    """Creates admins and authenticates them by email and password."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.rounds = settings.bcrypt_rounds

    def create_admin(self, email: str, password: str) -> Admin:
        """Create an admin with a bcrypt-hashed password.

        Raises ConflictError when the email is already taken.
        """
        admin = Admin(email=email, password=hash_password(password, self.rounds))
        self.db.add(admin)
        try:
            commit(self.db)
        except UniqueViolationError:
            logger.info("admin_email_conflict")
            raise ConflictError("Email admin sudah ada")

        self.db.refresh(admin)
        logger.info("admin_created", admin_id=admin.id)
        return admin

    def authenticate(self, email: str, password: str) -> Admin:
        """Return the admin matching the credentials.

        Unknown email and wrong password raise the same AuthenticationError.
        """
        admin = self.db.query(Admin).filter(Admin.email == email).first()

        if admin is None:
            verify_password(password, dummy_hash(self.rounds))
            raise AuthenticationError(BAD_CREDENTIALS)

        if not verify_password(password, admin.password):
            raise AuthenticationError(BAD_CREDENTIALS)

        logger.info("admin_authenticated", admin_id=admin.id)
        return admin
