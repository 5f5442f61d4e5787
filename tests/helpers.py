from jose import jwt

from core.auth.config import get_auth_settings

OWNER = "pseudo-owner-1"
OTHER = "pseudo-other-2"


def make_token(pseudonym_id: str) -> str:
    settings = get_auth_settings()
    return jwt.encode(
        {settings.PSEUDONYM_CLAIM: pseudonym_id},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def auth_headers(pseudonym_id: str = OWNER) -> dict:
    return {"Authorization": f"Bearer {make_token(pseudonym_id)}"}
