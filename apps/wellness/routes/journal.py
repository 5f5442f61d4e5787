from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apps.chat.db import get_chat_db
from apps.wellness.schemas.journal import (
    JournalEntryCreate, JournalEntryUpdate, JournalEntryRead,
    JournalEntryPage, MessageOnly
)
from apps.wellness.services import JournalService
from core.auth.dependencies import get_current_pseudonym

router = APIRouter()


async def get_journal_service(db: AsyncSession = Depends(get_chat_db)) -> JournalService:
    """Dependency to get journal service"""
    return JournalService(db)


@router.post("", response_model=JournalEntryRead, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: JournalEntryCreate,
    pseudonym_id: str = Depends(get_current_pseudonym),
    journal_service: JournalService = Depends(get_journal_service)
):
    """
    Create a new journal entry

    - **content**: Required entry text
    - **title**: Optional, defaults to "Untitled Entry"
    - **mood**: Optional mood tag
    - **tags**: Optional list of tags
    """
    return await journal_service.create_entry(pseudonym_id, entry_data)


@router.get("", response_model=JournalEntryPage)
async def list_entries(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    pseudonym_id: str = Depends(get_current_pseudonym),
    journal_service: JournalService = Depends(get_journal_service)
):
    """Get the caller's journal entries, newest first"""
    entries, pagination = await journal_service.list_entries(pseudonym_id, page, limit)
    return {"entries": entries, "pagination": pagination}


@router.get("/{entry_id}", response_model=JournalEntryRead)
async def get_entry(
    entry_id: str,
    pseudonym_id: str = Depends(get_current_pseudonym),
    journal_service: JournalService = Depends(get_journal_service)
):
    """Get a single journal entry"""
    return await journal_service.get_entry(pseudonym_id, entry_id)


@router.put("/{entry_id}", response_model=JournalEntryRead)
async def update_entry(
    entry_id: str,
    entry_data: JournalEntryUpdate,
    pseudonym_id: str = Depends(get_current_pseudonym),
    journal_service: JournalService = Depends(get_journal_service)
):
    """Update a journal entry; omitted fields are left unchanged"""
    return await journal_service.update_entry(pseudonym_id, entry_id, entry_data)


@router.delete("/{entry_id}", response_model=MessageOnly)
async def delete_entry(
    entry_id: str,
    pseudonym_id: str = Depends(get_current_pseudonym),
    journal_service: JournalService = Depends(get_journal_service)
):
    """Delete a journal entry"""
    await journal_service.delete_entry(pseudonym_id, entry_id)
    return {"message": "Entry deleted successfully"}
