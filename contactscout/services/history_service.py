from __future__ import annotations

import logging
from collections.abc import Sequence

from contactscout.core.config import settings
from contactscout.core.exceptions import PersistenceException
from contactscout.models.scrape_record import ScrapeRecord
from contactscout.schemas.scrape import DomainResult

logger = logging.getLogger(__name__)


class HistoryService:
    """Append-only store of past scrape results, queryable by recency"""

    async def save_results(self, results: Sequence[DomainResult]) -> int:
        """Insert the whole batch in one write. Returns the number of records."""
        if not results:
            return 0

        records = [
            ScrapeRecord(
                domain=item.domain,
                emails=list(item.result.emails),
                socials={k: list(v) for k, v in item.result.socials.items()},
                source=item.result.source,
            )
            for item in results
        ]
        try:
            await ScrapeRecord.insert_many(records)
        except Exception as e:
            raise PersistenceException(
                details={"record_count": len(records), "exception": type(e).__name__}
            ) from e

        logger.info("Scrape results saved", extra={"record_count": len(records)})
        return len(records)

    async def get_recent(self, limit: int | None = None) -> list[ScrapeRecord]:
        """Newest records first; insertion order breaks timestamp ties."""
        limit = limit or settings.HISTORY_LIMIT
        return (
            await ScrapeRecord.find_all()
            .sort("-created_at", "-_id")
            .limit(limit)
            .to_list()
        )
