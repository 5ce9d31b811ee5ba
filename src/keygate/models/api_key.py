"""API Key model."""

import enum

from sqlalchemy import Column, DateTime, Integer, String

from ..database import Base


class ApiKeyStatus(str, enum.Enum):
    """Key status. ``active`` -> ``inactive`` is the only transition."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ApiKey(Base):
    """API key that authorizes a user registration."""

    __tablename__ = "apikey"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(64), unique=True, nullable=False, index=True)
    status = Column(
        String(16), nullable=False, default=ApiKeyStatus.ACTIVE.value
    )
    outofdate = Column(DateTime, nullable=False)
    user_id = Column(Integer, nullable=True)

    def __repr__(self):
        return f"<ApiKey(id={self.id}, status='{self.status}')>"
