from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_current_owner, get_journal_service
from app.features.journaling.models import AnalyticsBundle
from app.features.journaling.service import JournalService
from app.shared.constants import DEFAULT_PERIOD

router = APIRouter(tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsBundle)
async def get_analytics(
    period: str = Query(default=DEFAULT_PERIOD, description="last7days, last30days, last3months, last6months or lastyear"),
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> AnalyticsBundle:
    """Totals, sentiment distribution, monthly/weekly series, top words and an AI summary."""
    return await service.get_analytics(owner_id, period)
