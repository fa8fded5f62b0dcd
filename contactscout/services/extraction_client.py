from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from contactscout.core.config import settings
from contactscout.core.resilience import ResilientHttpClient

logger = logging.getLogger(__name__)


class ExtractionClient:
    """Calls the upstream extraction provider for one batch of domains"""

    def __init__(
        self,
        http_client: ResilientHttpClient | None = None,
        *,
        base_url: str | None = None,
        path: str | None = None,
    ):
        self.name = "ExtractionClient"
        self.client = http_client or ResilientHttpClient()
        self.base_url = (base_url or settings.SCRAPER_API_BASE_URL).rstrip("/")
        self.path = path or settings.SCRAPER_API_PATH

    def build_url(self, domains: Sequence[str]) -> str:
        # One query parameter, encoded like encodeURIComponent
        encoded = quote(",".join(domains), safe="")
        return f"{self.base_url}{self.path}?domains={encoded}"

    async def fetch(self, domains: Sequence[str]) -> Any:
        """
        Fetch raw contact data for the given domains.

        Returns the provider's JSON body untouched: a single object or an
        array of objects. Raises UpstreamException once every attempt failed.
        """
        logger.info(
            f"{self.name}: requesting {len(domains)} domain(s)",
            extra={"domain_count": len(domains)},
        )
        return await self.client.get_json(self.build_url(domains))

    async def warm_up(self, domain: str | None = None) -> bool:
        """Wake a cold provider with one single-attempt request."""
        url = self.build_url([domain or settings.SCRAPER_WARMUP_DOMAIN])
        try:
            await self.client.get_json(url, max_attempts=1)
        except Exception as e:
            logger.info(
                f"{self.name}: warm-up request failed",
                extra={"exception": type(e).__name__},
            )
            return False
        logger.info(f"{self.name}: warm-up request succeeded")
        return True

    async def aclose(self) -> None:
        await self.client.aclose()
