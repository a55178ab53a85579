"""
Entries API Routes

Timeline listing and entry creation. Creating an entry scores its sentiment
before it is stored; a model outage files the entry as neutral instead of
failing the request.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_owner, get_journal_service
from app.api.models import CreateEntryRequest
from app.features.journaling.models import Entry
from app.features.journaling.service import JournalService

router = APIRouter(tags=["Entries"])


@router.get("/entries", response_model=List[Entry])
async def list_entries(
    month: Optional[int] = Query(default=None, description="1-12; year defaults to the current one"),
    year: Optional[int] = Query(default=None),
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> List[Entry]:
    """List the caller's entries, newest first."""
    return service.list_entries(owner_id, month=month, year=year)


@router.post("/entries", response_model=Entry)
async def create_entry(
    request: CreateEntryRequest,
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> Entry:
    """Create an entry with computed word count and sentiment."""
    return await service.create_entry(owner_id, request.title, request.content)
