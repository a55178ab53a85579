from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_owner, get_journal_service
from app.features.journaling.models import SearchResult
from app.features.journaling.search import require_query
from app.features.journaling.service import JournalService

router = APIRouter(tags=["Search"])


def search_query(
    q: Optional[str] = Query(default=None, description="Case-insensitive text to find in titles and contents"),
) -> str:
    """Reject a missing or blank q before the caller is authenticated."""
    return require_query(q)


@router.get("/search", response_model=List[SearchResult])
async def search_entries(
    q: str = Depends(search_query),
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> List[SearchResult]:
    """Up to 20 matching entries, newest first, each with a highlighted excerpt."""
    return service.search(owner_id, q)
