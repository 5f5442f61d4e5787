import math
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Tuple

from apps.chat.errors import handle_persistence_errors, NotFoundError, UnauthorizedError, ValidationError
from apps.chat.models.timestamps import utcnow
from apps.wellness.models import JournalEntry
from apps.wellness.schemas.journal import JournalEntryCreate, JournalEntryUpdate

REQUIRED_FIELDS = ("title", "content", "tags")


class JournalService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, pseudonym_id: str, entry_id: str) -> JournalEntry:
        entry = await self._get(entry_id)
        if entry is None:
            raise NotFoundError("Entry not found", resource_id=entry_id)
        if entry.pseudonym_id != pseudonym_id:
            raise UnauthorizedError("Not authorized to access this entry")
        return entry

    @handle_persistence_errors("journal.get")
    async def _get(self, entry_id: str):
        result = await self.db.execute(
            select(JournalEntry).where(JournalEntry.id == entry_id)
        )
        return result.scalar_one_or_none()

    @handle_persistence_errors("journal.create")
    async def create_entry(self, pseudonym_id: str, entry_data: JournalEntryCreate) -> JournalEntry:
        """Create a new journal entry"""
        if not entry_data.content or not entry_data.content.strip():
            raise ValidationError("Content is required", parameter="content")

        entry = JournalEntry(
            pseudonym_id=pseudonym_id,
            title=entry_data.title or "Untitled Entry",
            content=entry_data.content,
            mood=entry_data.mood,
            tags=entry_data.tags or [],
        )
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    @handle_persistence_errors("journal.list")
    async def list_entries(self, pseudonym_id: str, page: int = 1, limit: int = 20) -> Tuple[List[JournalEntry], dict]:
        """Get a page of the caller's entries, newest first"""
        skip = (page - 1) * limit

        result = await self.db.execute(
            select(JournalEntry)
            .where(JournalEntry.pseudonym_id == pseudonym_id)
            .order_by(JournalEntry.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        entries = list(result.scalars().all())

        total = await self.db.scalar(
            select(func.count()).select_from(JournalEntry).where(JournalEntry.pseudonym_id == pseudonym_id)
        )
        total = total or 0
        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        }
        return entries, pagination

    async def get_entry(self, pseudonym_id: str, entry_id: str) -> JournalEntry:
        return await self._get_owned(pseudonym_id, entry_id)

    async def update_entry(self, pseudonym_id: str, entry_id: str, entry_data: JournalEntryUpdate) -> JournalEntry:
        """Update only the fields present in the request"""
        entry = await self._get_owned(pseudonym_id, entry_id)

        update_data = entry_data.model_dump(exclude_unset=True)
        # Only mood may be cleared; the other columns are NOT NULL
        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field.capitalize()} cannot be null", parameter=field)
        if "content" in update_data and not update_data["content"].strip():
            raise ValidationError("Content is required", parameter="content")
        for field, value in update_data.items():
            setattr(entry, field, value)
        entry.updated_at = utcnow()

        return await self._save(entry)

    @handle_persistence_errors("journal.save")
    async def _save(self, entry: JournalEntry) -> JournalEntry:
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def delete_entry(self, pseudonym_id: str, entry_id: str) -> None:
        entry = await self._get_owned(pseudonym_id, entry_id)
        await self._delete(entry)

    @handle_persistence_errors("journal.delete")
    async def _delete(self, entry: JournalEntry) -> None:
        await self.db.delete(entry)
        await self.db.commit()
