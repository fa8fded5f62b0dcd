"""
Scrape endpoints

- GET /scrape-domain - provider body passed through unchanged
- GET /api/scrape - per-domain results assembled from the provider body
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from contactscout.api.dependencies import get_scrape_orchestrator
from contactscout.core.exceptions import ValidationException
from contactscout.schemas.response import SuccessResponse
from contactscout.schemas.scrape import DomainResult
from contactscout.services.scrape_orchestrator import ScrapeOrchestrator

router = APIRouter()
api_router = APIRouter()
logger = logging.getLogger(__name__)


def require_domains(domains: str | None) -> str:
    if not domains:
        raise ValidationException("Domains parameter is required")
    return domains


@router.get("/scrape-domain")
async def scrape_domain(
    domains: str | None = Query(None, description="Comma-separated domains"),
    orchestrator: ScrapeOrchestrator = Depends(get_scrape_orchestrator),
) -> Any:
    """Fetch contact data and return the provider's JSON as is (object or array)."""
    outcome = await orchestrator.scrape(require_domains(domains))
    return JSONResponse(status_code=200, content=outcome.payload)


@api_router.get("/scrape", response_model=SuccessResponse[list[DomainResult]])
async def scrape_results(
    domains: str | None = Query(None, description="Comma or newline separated"),
    orchestrator: ScrapeOrchestrator = Depends(get_scrape_orchestrator),
):
    results = await orchestrator.handle(require_domains(domains))
    logger.info("Scrape completed", extra={"result_count": len(results)})
    return SuccessResponse[list[DomainResult]](
        message="Scrape completed", data=results
    )
