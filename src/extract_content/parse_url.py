"""Split tab URLs into the domain and path features used for scoring."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from extract_content.models import TabFeatures

MAX_PATH_TOKENS = 5
MIN_TOKEN_LENGTH = 3

_PATH_SEPARATORS = re.compile(r"[/\-_]")


def parse_url(url: str | None) -> TabFeatures:
    """
    Parse a URL into domain, base domain and lowercase path tokens.

    Malformed input never raises: anything without a scheme, or that the
    URL parser rejects, yields empty features.

    Args:
        url: Raw tab URL

    Returns:
        TabFeatures for the URL
    """
    if not url or not isinstance(url, str):
        return TabFeatures()

    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname or ""
    except ValueError:
        return TabFeatures()

    if not parts.scheme:
        return TabFeatures()

    domain = hostname[4:] if hostname.startswith("www.") else hostname
    labels = domain.split(".")
    base_domain = ".".join(labels[-2:]) if len(labels) >= 2 else domain

    tokens = [
        token for token in _PATH_SEPARATORS.split(parts.path.lower()) if len(token) >= MIN_TOKEN_LENGTH
    ]

    return TabFeatures(
        domain=domain,
        base_domain=base_domain,
        path_tokens=tuple(tokens[:MAX_PATH_TOKENS]),
    )
