from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from contactscout.core.config import settings
from contactscout.models.scrape_record import ScrapeRecord
from contactscout.schemas.scrape import DomainResult
from contactscout.services.domain_normalizer import normalize_domains
from contactscout.services.extraction_client import ExtractionClient
from contactscout.services.history_service import HistoryService
from contactscout.services.result_assembler import assemble_results

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    FETCHING = "fetching"
    ASSEMBLING = "assembling"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ScrapeOutcome:
    domains: list[str]
    payload: Any
    results: list[DomainResult] = field(default_factory=list)


class ScrapeOrchestrator:
    """
    Runs one scrape request end to end:
    normalize -> extract -> assemble -> persist (best effort) -> return.

    Validation and upstream errors propagate unchanged. Persistence runs in a
    detached task whose failure is only logged; callers never wait on it.
    """

    def __init__(
        self,
        extraction_client: ExtractionClient | None = None,
        history_service: HistoryService | None = None,
    ):
        self.name = "ScrapeOrchestrator"
        self.extraction_client = extraction_client or ExtractionClient()
        self.history_service = history_service or HistoryService()
        self._pending: set[asyncio.Task] = set()

    async def handle(self, raw_input: str | None) -> list[DomainResult]:
        outcome = await self.scrape(raw_input)
        return outcome.results

    async def scrape(self, raw_input: str | None) -> ScrapeOutcome:
        state = RequestState.IDLE
        try:
            state = self._transition(state, RequestState.NORMALIZING)
            domains = normalize_domains(raw_input)

            state = self._transition(state, RequestState.FETCHING, len(domains))
            payload = await self.extraction_client.fetch(domains)

            state = self._transition(state, RequestState.ASSEMBLING, len(domains))
            results = assemble_results(domains, payload)
        except Exception as e:
            logger.warning(
                f"{self.name}: request failed while {state.value}",
                extra={"state": state.value, "exception": type(e).__name__},
            )
            self._transition(state, RequestState.FAILED)
            raise

        state = self._transition(state, RequestState.PERSISTING, len(results))
        self.persist_in_background(results)
        self._transition(state, RequestState.DONE, len(results))
        return ScrapeOutcome(domains=domains, payload=payload, results=results)

    def persist_in_background(self, results: list[DomainResult]) -> asyncio.Task | None:
        if not results:
            return None
        task = asyncio.create_task(self.history_service.save_results(results))
        self._pending.add(task)
        task.add_done_callback(self._on_persist_done)
        return task

    def _on_persist_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning(f"{self.name}: persistence task cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"{self.name}: failed to save results",
                exc_info=(type(exc), exc, exc.__traceback__),
                extra={"exception": type(exc).__name__},
            )

    async def wait_for_pending(self) -> None:
        """Wait until every in-flight persistence task has finished."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def recent_history(self, limit: int | None = None) -> list[ScrapeRecord]:
        return await self.history_service.get_recent(limit or settings.HISTORY_LIMIT)

    def _transition(
        self, current: RequestState, target: RequestState, count: int | None = None
    ) -> RequestState:
        extra: dict[str, Any] = {"from_state": current.value, "to_state": target.value}
        if count is not None:
            extra["count"] = count
        logger.debug(f"{self.name}: {current.value} -> {target.value}", extra=extra)
        return target
