"""Build the text blob embedded for each tab."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from urllib.parse import urlsplit

import requests
from lxml import html as lxml_html

from common.utils import get_text, get_value
from extract_content.models import EnrichedTab
from extract_content.parse_url import parse_url

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 2000
REQUEST_TIMEOUT = 10
FETCHABLE_SCHEMES = ("http", "https")

_PATH_HINT_SEPARATORS = re.compile(r"[/\-_.]")

# Main-content containers, most specific first; plain //p is the last resort
MAIN_PARAGRAPH_XPATHS = (
    "//article//p",
    "//main//p",
    "//*[contains(concat(' ', normalize-space(@class), ' '), ' content ')]//p",
    "//p",
)


def build_content_blob(tab: Any, fetch: bool = False) -> str:
    """
    Return the text blob for a tab.

    Order:
    1. pre-extracted ``content`` supplied with the tab
    2. page content fetched from the URL (only when ``fetch`` is set)
    3. the title alone

    Fetch failures degrade to the title, they are never raised.
    """
    content = get_text(tab, "content")
    if content:
        return content[:MAX_CONTENT_CHARS]

    title = get_text(tab, "title")
    url = get_text(tab, "url")

    if fetch and _is_fetchable(url):
        try:
            page = fetch_page_content(url)
        except Exception as e:
            logger.warning("Content extraction failed for %s: %s", url, e)
            page = None
        if page:
            if not page.get("title"):
                page["title"] = title
            blob = _join_page_content(page)
            if blob:
                return blob

    return title


def fetch_page_content(url: str) -> Optional[dict[str, str]]:
    """Download a page and pull out its title, meta tags, headings and opening paragraphs."""
    response = requests.get(
        url,
        timeout=REQUEST_TIMEOUT,
        headers={"User-Agent": "tab-grouper/1.0 (content extractor)"},
    )
    response.raise_for_status()

    if not response.text:
        return None

    tree = lxml_html.fromstring(response.text)
    return {
        "title": _first_text(tree, "//title", 1),
        "description": _meta(tree, "description") or _meta(tree, "og:description"),
        "keywords": _meta(tree, "keywords"),
        "h1": _first_text(tree, "//h1", 1),
        "h2": _first_text(tree, "//h2", 3),
        "paragraphs": _main_paragraphs(tree, 2),
        "path_hint": _PATH_HINT_SEPARATORS.sub(" ", urlsplit(url).path).strip(),
    }


def enrich_tabs(tabs: list[Any], fetch: bool = False) -> list[EnrichedTab]:
    """
    Attach content blobs and URL features to tabs.

    Args:
        tabs: Tab dicts or objects with id, title, url and optional content fields
        fetch: Download page content for tabs without pre-extracted content

    Returns:
        List of EnrichedTab in input order
    """
    enriched = []
    for tab in tabs:
        url = get_text(tab, "url")
        features = parse_url(url)
        enriched.append(
            EnrichedTab(
                id=get_value(tab, "id"),
                title=get_text(tab, "title"),
                url=url,
                content=build_content_blob(tab, fetch=fetch),
                domain=features.domain,
                base_domain=features.base_domain,
                path_tokens=features.path_tokens,
            )
        )

    logger.info("Enriched %d tabs (fetch=%s)", len(enriched), fetch)
    return enriched


def _is_fetchable(url: str) -> bool:
    if not url:
        return False
    try:
        return urlsplit(url).scheme in FETCHABLE_SCHEMES
    except ValueError:
        return False


def _meta(tree, name: str) -> str:
    for attribute in ("name", "property"):
        values = tree.xpath(f'//meta[@{attribute}="{name}"]/@content')
        if values and values[0].strip():
            return values[0].strip()
    return ""


def _first_text(tree, xpath: str, limit: int) -> str:
    elements = tree.xpath(xpath)[:limit]
    texts = [" ".join(element.text_content().split()) for element in elements]
    return " ".join(text for text in texts if text)


def _main_paragraphs(tree, limit: int) -> str:
    for xpath in MAIN_PARAGRAPH_XPATHS:
        text = _first_text(tree, xpath, limit)
        if text:
            return text
    return ""


def _join_page_content(page: dict[str, str]) -> str:
    fields = ("title", "description", "keywords", "h1", "h2", "paragraphs", "path_hint")
    parts = [page.get(name) for name in fields]
    return " ".join(part for part in parts if part)[:MAX_CONTENT_CHARS]
