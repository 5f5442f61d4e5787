from typing import Optional
from pydantic import BaseModel


class TokenDataSchema(BaseModel):
    """Claims the chat engine relies on."""
    pseudonym_id: str
    exp: Optional[int] = None
