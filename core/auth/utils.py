from typing import Optional
from jose import JWTError, jwt
from core.auth.schemas import TokenDataSchema
from core.auth.config import get_auth_settings


class JWTUtils:
    """Utilities for JWT token validation."""

    @staticmethod
    def verify_token(token: str) -> Optional[TokenDataSchema]:
        """
        Verify and decode a JWT token.

        Returns:
            TokenDataSchema if valid, None if invalid
        """
        auth_settings = get_auth_settings()
        try:
            payload = jwt.decode(token, auth_settings.JWT_SECRET_KEY, algorithms=[auth_settings.JWT_ALGORITHM])
        except JWTError:
            return None

        pseudonym_id = payload.get(auth_settings.PSEUDONYM_CLAIM)
        if not pseudonym_id or not isinstance(pseudonym_id, str):
            return None

        return TokenDataSchema(pseudonym_id=pseudonym_id, exp=payload.get("exp"))
