"""Test configuration and fixtures."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from contactscout.core.resilience import ResilientHttpClient, RetryPolicy
from contactscout.models.scrape_record import ScrapeRecord
from contactscout.services.extraction_client import ExtractionClient

PROVIDER_BASE_URL = "https://provider.test"


class ProviderStub:
    """Scripted upstream provider for httpx.MockTransport.

    Each entry in ``responses`` is either an ``httpx.Response``, an
    exception instance to raise, or a JSON-serializable body returned with
    status 200. The last entry repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        item = self.responses[index]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, content=json.dumps(item).encode())

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def acme_payload():
    """Single-object provider response for acme.com."""
    return {
        "source": "homepage",
        "emails": ["info@acme.com"],
        "socials": {"instagram": ["https://instagram.com/acme"]},
    }


@pytest.fixture
def fake_sleep():
    """Records retry delays instead of waiting."""
    return AsyncMock()


@pytest.fixture
def make_extraction_client(fake_sleep):
    """Build an ExtractionClient wired to a ProviderStub."""

    def factory(stub: ProviderStub, max_attempts: int = 3, delay_seconds: float = 3.0):
        http_client = ResilientHttpClient(
            timeout_seconds=5,
            retry_policy=RetryPolicy(
                max_attempts=max_attempts,
                delay_seconds=delay_seconds,
                sleep=fake_sleep,
            ),
            transport=httpx.MockTransport(stub),
        )
        return ExtractionClient(http_client, base_url=PROVIDER_BASE_URL)

    return factory


@pytest.fixture
def mock_history_service():
    """Mock HistoryService for testing."""
    service = AsyncMock()
    service.save_results = AsyncMock(side_effect=lambda results: len(results))
    service.get_recent = AsyncMock(return_value=[])
    return service


@pytest_asyncio.fixture
async def beanie_init():
    """Initialize Beanie against an in-memory MongoDB."""
    client = AsyncMongoMockClient()
    database = client["test_contact_scout"]
    await init_beanie(database=database, document_models=[ScrapeRecord])
    yield database
