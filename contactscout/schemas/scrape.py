from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ScrapeResult(BaseModel):
    """Contact data the provider returned for one domain."""

    # Provider fields we do not model (e.g. its own `domain`) are kept
    model_config = ConfigDict(extra="allow")

    source: str = ""
    emails: list[str] = Field(default_factory=list)
    socials: dict[str, list[str]] = Field(default_factory=dict)


class DomainResult(BaseModel):
    domain: str
    result: ScrapeResult


class HistoryRecordSchema(BaseModel):
    id: str
    domain: str
    emails: list[str]
    socials: dict[str, list[str]]
    source: str
    created_at: datetime
