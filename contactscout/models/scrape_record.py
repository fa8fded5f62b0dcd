from __future__ import annotations

from datetime import UTC, datetime

from beanie import Document
from pydantic import Field

from contactscout.core.config import settings


class ScrapeRecord(Document):
    """One persisted per-domain scrape result. Insert-only."""

    domain: str
    emails: list[str] = Field(default_factory=list)
    socials: dict[str, list[str]] = Field(default_factory=dict)
    source: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    class Settings:
        name = settings.MONGODB_COLLECTION_RESULTS
        indexes = [
            [
                ("created_at", -1),
            ],
        ]
