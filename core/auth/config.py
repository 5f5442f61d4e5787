from pydantic_settings import BaseSettings
from functools import lru_cache


class AuthSettings(BaseSettings):
    """Settings for verifying bearer tokens issued by the identity service."""

    # JWT Configuration (shared with the issuer)
    JWT_SECRET_KEY: str = "your-super-secret-jwt-key-change-this-in-production-minimum-32-characters"
    JWT_ALGORITHM: str = "HS256"

    # Claim carrying the caller's pseudonym
    PSEUDONYM_CLAIM: str = "pseudonymId"

    class Config:
        env_prefix = "AUTH_"
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_auth_settings():
    """Get cached auth settings instance."""
    return AuthSettings()
