from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from contactscout.core.config import settings
from contactscout.core.exceptions import UpstreamException
from contactscout.core.logging import sanitize_log_data

logger = logging.getLogger(__name__)


@dataclass
class RetryPolicy:
    """Fixed-delay retry budget: no jitter, no exponential growth."""

    max_attempts: int = 3
    delay_seconds: float = 3.0
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep)

    @classmethod
    def from_settings(cls) -> RetryPolicy:
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            delay_seconds=settings.RETRY_DELAY_SECONDS,
        )


class ResilientHttpClient:
    """
    httpx.AsyncClient wrapper that retries GETs with a fixed delay.

    Any transport error, any non-2xx status and any body that is not valid
    JSON counts as a failed attempt. Once the retry budget is spent an
    UpstreamException carrying the last failure is raised.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout = timeout_seconds or float(settings.EXTERNAL_API_TIMEOUT)
        self._retry = retry_policy or RetryPolicy.from_settings()

        client_kwargs: dict[str, Any] = {"timeout": self._timeout}
        if transport is not None:
            client_kwargs["transport"] = transport
        if headers is not None:
            client_kwargs["headers"] = headers

        self._client = httpx.AsyncClient(**client_kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, url: str, *, max_attempts: int | None = None) -> Any:
        attempts = max_attempts or self._retry.max_attempts
        sanitized_url = sanitize_log_data({"url": url}).get("url", url)
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                start = time.perf_counter()
                response = await self._client.get(url)
                latency_ms = int((time.perf_counter() - start) * 1000)
                # 3xx is not followed and counts as a failure
                if not response.is_success:
                    raise httpx.HTTPStatusError(
                        f"API returned {response.status_code}",
                        request=response.request,
                        response=response,
                    )
                payload = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                last_exc = exc
                if attempt < attempts:
                    logger.warning(
                        "Upstream attempt failed, retrying",
                        extra={
                            "url": sanitized_url,
                            "attempt": attempt,
                            "max_attempts": attempts,
                            "exception": type(exc).__name__,
                            "delay_seconds": self._retry.delay_seconds,
                        },
                    )
                    await self._retry.sleep(self._retry.delay_seconds)
                continue

            logger.info(
                "HTTP request success",
                extra={
                    "url": sanitized_url,
                    "status": response.status_code,
                    "attempt": attempt,
                    "latency_ms": latency_ms,
                },
            )
            return payload

        logger.error(
            "Upstream request failed - giving up",
            extra={
                "url": sanitized_url,
                "attempts": attempts,
                "exception": type(last_exc).__name__,
            },
        )
        raise UpstreamException(last_error=last_exc, attempts=attempts) from last_exc
