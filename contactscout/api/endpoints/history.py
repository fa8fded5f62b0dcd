from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from contactscout.api.dependencies import get_scrape_orchestrator
from contactscout.core.config import settings
from contactscout.schemas.response import SuccessResponse
from contactscout.schemas.scrape import HistoryRecordSchema
from contactscout.services.scrape_orchestrator import ScrapeOrchestrator

router = APIRouter()


@router.get("", response_model=SuccessResponse[list[HistoryRecordSchema]])
async def list_recent_results(
    limit: int = Query(settings.HISTORY_LIMIT, ge=1, le=settings.HISTORY_MAX_LIMIT),
    orchestrator: ScrapeOrchestrator = Depends(get_scrape_orchestrator),
):
    """Most recently saved results, newest first"""
    records = await orchestrator.recent_history(limit)

    payload = [
        HistoryRecordSchema(
            id=str(r.id),
            domain=r.domain,
            emails=r.emails,
            socials=r.socials,
            source=r.source,
            created_at=r.created_at,
        )
        for r in records
    ]

    return SuccessResponse[list[HistoryRecordSchema]](
        message="History retrieved", data=payload
    )
