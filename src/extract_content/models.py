"""Data models for extract_content pipeline stage."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TabFeatures:
    """URL-derived features used for similarity scoring."""
    domain: str = ""
    base_domain: str = ""
    path_tokens: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EnrichedTab:
    """Tab with its content blob and URL features."""
    id: int | str
    title: str
    url: str
    content: str
    domain: str
    base_domain: str
    path_tokens: tuple[str, ...]
