from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, Optional, List
from apps.wellness.models import JournalMood

CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}

# Individual tags are short labels
Tag = Annotated[str, Field(max_length=50)]


class JournalEntryCreate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=10000)
    mood: Optional[JournalMood] = None
    tags: Optional[List[Tag]] = None


class JournalEntryUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=10000)
    mood: Optional[JournalMood] = None
    tags: Optional[List[Tag]] = None


class JournalEntryRead(BaseModel):
    id: str
    pseudonym_id: str
    title: str
    content: str
    mood: Optional[JournalMood] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = CAMEL_CONFIG


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class JournalEntryPage(BaseModel):
    entries: List[JournalEntryRead]
    pagination: Pagination


class MessageOnly(BaseModel):
    message: str
