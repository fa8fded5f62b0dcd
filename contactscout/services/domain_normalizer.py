from __future__ import annotations

import re

from contactscout.core.exceptions import ValidationException

DELIMITER_PATTERN = re.compile(r"[,\n]+")
SCHEME_PATTERN = re.compile(r"^https?://")


def clean_domain(value: str) -> str:
    """
    Trim, drop a leading http(s):// and exactly one trailing slash.

    Whitespace inside the value is not rejected; "a b.com" is passed on to
    the provider as is.
    """
    value = SCHEME_PATTERN.sub("", value.strip(), count=1)
    if value.endswith("/"):
        value = value[:-1]
    return value


def normalize_domains(raw: str | None) -> list[str]:
    """
    Turn free-form user input into an ordered list of bare domains.

    Entries may be separated by commas and/or newlines. Order and duplicates
    are kept because results are later matched back by position. Case is
    left untouched.

    Raises:
        ValidationException: if no usable domain remains
    """
    if raw is None or not raw.strip():
        raise ValidationException("Please enter at least one domain")

    domains = [clean_domain(piece) for piece in DELIMITER_PATTERN.split(raw)]
    domains = [domain for domain in domains if domain]

    if not domains:
        raise ValidationException("Please enter at least one valid domain")
    return domains
