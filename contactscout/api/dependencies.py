from __future__ import annotations

from fastapi import Request

from contactscout.services.scrape_orchestrator import ScrapeOrchestrator


def get_scrape_orchestrator(request: Request) -> ScrapeOrchestrator:
    """Orchestrator created at startup and shared by all requests"""
    orchestrator = getattr(request.app.state, "scrape_orchestrator", None)
    if orchestrator is None:
        orchestrator = ScrapeOrchestrator()
        request.app.state.scrape_orchestrator = orchestrator
    return orchestrator
