from .dependencies import get_current_pseudonym, security
from .utils import JWTUtils

__all__ = ["get_current_pseudonym", "security", "JWTUtils"]
