from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_owner, get_journal_service
from app.features.journaling.models import Entry
from app.features.journaling.service import JournalService

router = APIRouter(tags=["Memories"])


@router.get("/memories/today", response_model=Optional[Entry])
async def get_today_memory(
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> Optional[Entry]:
    """The most recent entry from a previous year written on today's date, or null."""
    return service.get_today_memory(owner_id)
