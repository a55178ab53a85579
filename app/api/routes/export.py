"""
Export API Routes

Builds the yearly "life story" document. The response carries the rendered
HTML, which the browser prints to PDF, and the chapter structure it came from.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_owner, get_journal_service
from app.api.models import ExportRequest
from app.features.journaling.models import ExportResult
from app.features.journaling.service import JournalService

router = APIRouter(tags=["Export"])


@router.post("/export/pdf", response_model=ExportResult)
async def export_year(
    request: ExportRequest,
    owner_id: str = Depends(get_current_owner),
    service: JournalService = Depends(get_journal_service),
) -> ExportResult:
    return service.compose_export(owner_id, request.year, request.title)
