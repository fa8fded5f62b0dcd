from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from contactscout.schemas.scrape import DomainResult, ScrapeResult

UNKNOWN_DOMAIN = "Unknown"


def string_list(value: Any) -> list[str]:
    """Keep only the string entries; a bare string becomes a one-item list."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, str)]


def to_scrape_result(item: Any) -> ScrapeResult:
    """Build a ScrapeResult from one provider element, tolerating bad values."""
    if not isinstance(item, dict):
        return ScrapeResult()
    data = dict(item)

    source = data.get("source")
    data["source"] = "" if source is None else str(source)
    data["emails"] = string_list(data.get("emails"))

    socials = data.get("socials")
    if not isinstance(socials, dict):
        socials = {}
    # A null platform means the platform is absent
    data["socials"] = {
        str(platform): string_list(links)
        for platform, links in socials.items()
        if links is not None
    }
    return ScrapeResult.model_validate(data)


def assemble_results(domains: Sequence[str], payload: Any) -> list[DomainResult]:
    """
    Map a provider response back onto the requested domains.

    An array is correlated by position: element i belongs to domains[i].
    The element's own ``domain`` field is used only when there is no
    requested domain at that index, then ``"Unknown"``. A short array leaves
    the trailing domains without a result.

    Any other payload is the single-domain shape and is bound to domains[0].
    """
    if isinstance(payload, list):
        results = []
        for index, item in enumerate(payload):
            domain = domains[index] if index < len(domains) else None
            if not domain and isinstance(item, dict):
                own = item.get("domain")
                domain = own if isinstance(own, str) else None
            results.append(
                DomainResult(
                    domain=domain or UNKNOWN_DOMAIN, result=to_scrape_result(item)
                )
            )
        return results

    return [
        DomainResult(
            domain=domains[0] if domains else UNKNOWN_DOMAIN,
            result=to_scrape_result(payload),
        )
    ]
