from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./keygate.db"

    # Security
    jwt_secret: str = Field(..., description="Secret used to sign admin tokens")
    jwt_algorithm: str = "HS256"
    token_expiry_minutes: int = Field(60, ge=1)
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # API keys
    api_key_prefix: str = "Lila_secr3t_"
    api_key_ttl_days: int = Field(30, ge=1)

    # Server Settings
    debug: bool = False
    log_level: str = "info"
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: List[str] = ["*"]
    static_dir: str = "public"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("jwt_secret")
    @classmethod
    def reject_blank_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET must not be blank")
        return value
