from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime, timezone


# =============================================================================
# API Key Schemas
# =============================================================================


class APIKeyCreated(BaseModel):
    """Freshly generated API key."""

    id: int
    apiKey: str


class APIKeyInfo(BaseModel):
    """API key as listed to admins."""

    id: int
    api_key: str
    status: str
    user_id: Optional[int] = None
    expires_at: datetime

    @field_validator("expires_at")
    @classmethod
    def mark_utc(cls, value: datetime) -> datetime:
        # Stored timestamps are naive UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# =============================================================================
# User Schemas
# =============================================================================


class RegisterRequest(BaseModel):
    """User registration request. Required fields are checked by the handler."""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    apikey_id: Optional[int] = Field(None, description="Id of an active API key")


class UserInfo(BaseModel):
    """Registered user as listed to admins."""

    model_config = {"from_attributes": True}

    id: int
    firstname: str
    lastname: str
    email: str
    start_date: date
    last_date: Optional[date] = None
    apikey: int


# =============================================================================
# Admin Schemas
# =============================================================================


class AdminCredentials(BaseModel):
    """Email and password, used for both admin creation and login."""

    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


class AdminIdentity(BaseModel):
    """Claims of a verified admin token."""

    id: int
    role: str


# =============================================================================
# Common Schemas
# =============================================================================


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
