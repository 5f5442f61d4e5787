from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from apps.wellness.models import Emotion


class MoodLogCreate(BaseModel):
    emotion: Emotion
    intensity: int = Field(..., ge=1, le=10)
    note: Optional[str] = Field(default=None, max_length=500)


class MoodLogRead(BaseModel):
    id: str
    pseudonym_id: str
    emotion: Emotion
    intensity: int
    note: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
