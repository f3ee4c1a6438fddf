"""Tests for extract_content.extract_content module."""

from unittest.mock import Mock, patch

from extract_content.extract_content import (
    MAX_CONTENT_CHARS,
    build_content_blob,
    enrich_tabs,
    fetch_page_content,
)

PAGE_HTML = """
<html>
  <head>
    <title>Page Title</title>
    <meta name="description" content="A description">
    <meta name="keywords" content="k1, k2">
  </head>
  <body>
    <h1>Heading</h1>
    <h2>Sub one</h2>
    <p>First para.</p>
    <p>Second   para.</p>
    <p>Third para.</p>
  </body>
</html>
"""


def _response(text: str) -> Mock:
    response = Mock()
    response.text = text
    return response


class TestFetchPageContent:
    @patch("extract_content.extract_content.requests")
    def test_extracts_page_fields(self, mock_req) -> None:
        mock_req.get.return_value = _response(PAGE_HTML)

        page = fetch_page_content("https://example.com/docs/getting-started")

        assert page == {
            "title": "Page Title",
            "description": "A description",
            "keywords": "k1, k2",
            "h1": "Heading",
            "h2": "Sub one",
            "paragraphs": "First para. Second para.",
            "path_hint": "docs getting started",
        }

    @patch("extract_content.extract_content.requests")
    def test_falls_back_to_og_description(self, mock_req) -> None:
        mock_req.get.return_value = _response(
            '<html><head><meta property="og:description" content="OG desc"></head>'
            "<body><p>Body</p></body></html>"
        )

        page = fetch_page_content("https://example.com/")

        assert page["description"] == "OG desc"

    @patch("extract_content.extract_content.requests")
    def test_prefers_article_paragraphs(self, mock_req) -> None:
        mock_req.get.return_value = _response(
            "<html><body><nav><p>Sign in</p><p>Menu</p></nav>"
            "<main><p>Main text.</p></main>"
            "<article><p>Story one.</p><p>Story two.</p><p>Story three.</p></article>"
            "</body></html>"
        )

        page = fetch_page_content("https://example.com/")

        assert page["paragraphs"] == "Story one. Story two."

    @patch("extract_content.extract_content.requests")
    def test_uses_content_class_paragraphs(self, mock_req) -> None:
        mock_req.get.return_value = _response(
            "<html><body><div class='header'><p>Cookie banner</p></div>"
            "<div class='post content'><p>Body text.</p></div></body></html>"
        )

        page = fetch_page_content("https://example.com/")

        assert page["paragraphs"] == "Body text."

    @patch("extract_content.extract_content.requests")
    def test_empty_body_returns_none(self, mock_req) -> None:
        mock_req.get.return_value = _response("")
        assert fetch_page_content("https://example.com/") is None


class TestBuildContentBlob:
    def test_uses_supplied_content(self) -> None:
        tab = {"title": "T", "url": "https://example.com", "content": "Supplied text"}
        assert build_content_blob(tab, fetch=True) == "Supplied text"

    def test_truncates_supplied_content(self) -> None:
        tab = {"title": "T", "url": "https://example.com", "content": "x" * 5000}
        assert len(build_content_blob(tab)) == MAX_CONTENT_CHARS

    def test_title_only_without_fetch(self) -> None:
        tab = {"title": "React Hooks", "url": "https://reactjs.org/docs/hooks-intro"}
        assert build_content_blob(tab) == "React Hooks"

    @patch("extract_content.extract_content.requests")
    def test_fetched_blob_joins_fields_in_order(self, mock_req) -> None:
        mock_req.get.return_value = _response(PAGE_HTML)
        tab = {"title": "Tab Title", "url": "https://example.com/docs/getting-started"}

        blob = build_content_blob(tab, fetch=True)

        assert blob == (
            "Page Title A description k1, k2 Heading Sub one "
            "First para. Second para. docs getting started"
        )

    @patch("extract_content.extract_content.requests")
    def test_restricted_scheme_uses_title(self, mock_req) -> None:
        tab = {"title": "Extensions", "url": "chrome://extensions"}

        assert build_content_blob(tab, fetch=True) == "Extensions"
        mock_req.get.assert_not_called()

    @patch("extract_content.extract_content.requests")
    def test_fetch_failure_degrades_to_title(self, mock_req) -> None:
        mock_req.get.side_effect = Exception("connection refused")
        tab = {"title": "React Hooks", "url": "https://reactjs.org/docs/hooks-intro"}

        assert build_content_blob(tab, fetch=True) == "React Hooks"

    def test_missing_title_returns_empty(self) -> None:
        assert build_content_blob({"url": "https://example.com"}) == ""


class TestEnrichTabs:
    def test_attaches_features_and_content(self) -> None:
        tabs = [
            {"id": 7, "title": "React Hooks", "url": "https://www.reactjs.org/docs/hooks-intro"},
            {"id": 8, "title": "Bad", "url": "not a url"},
        ]

        enriched = enrich_tabs(tabs)

        assert [tab.id for tab in enriched] == [7, 8]
        assert enriched[0].content == "React Hooks"
        assert enriched[0].domain == "reactjs.org"
        assert enriched[0].path_tokens == ("docs", "hooks", "intro")
        assert enriched[1].domain == ""
        assert enriched[1].path_tokens == ()

    def test_accepts_objects(self) -> None:
        tab = Mock(id="t1", title="Title", url="https://example.com/page", content=None)

        enriched = enrich_tabs([tab])

        assert enriched[0].id == "t1"
        assert enriched[0].content == "Title"
