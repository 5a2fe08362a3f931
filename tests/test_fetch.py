"""Tests for the content fetcher and HTML sanitization.

Tests cover:
- sanitize_html: invisible elements dropped, whitespace collapsed, truncation
- ContentFetcher: success, non-2xx statuses, transport failures, redirects
- Properties: any page yields non-empty text within the character bound
"""

from __future__ import annotations

import httpx
import pytest
from hypothesis import given, settings

from newsbrief.fetch import MAX_CONTENT_CHARS, NO_CONTENT, ContentFetcher, sanitize_html
from tests.conftest import html_page, make_transport
from tests.strategies import page_text

URL = "https://news.example/today"


# ---------------------------------------------------------------------------
# sanitize_html
# ---------------------------------------------------------------------------


class TestSanitizeHtml:
    def test_extracts_body_text(self):
        text = sanitize_html(html_page("<h1>Headline</h1><p>Story body.</p>", title="Ignored"))
        assert "Headline" in text
        assert "Story body." in text
        assert "Ignored" not in text

    def test_drops_scripts_and_styles(self):
        html = html_page(
            "<p>Visible</p>"
            "<script>var secret = 'tracking';</script>"
            "<style>.x { color: red; }</style>"
            "<noscript>Enable JS</noscript>"
        )
        text = sanitize_html(html)
        assert text == "Visible"

    def test_collapses_whitespace(self):
        text = sanitize_html(html_page("<p>  one\n\n two\t\tthree  </p>\n<p>four</p>"))
        assert text == "one two three four"

    def test_truncates(self):
        text = sanitize_html(html_page("<p>" + "word " * 2000 + "</p>"))
        assert len(text) <= MAX_CONTENT_CHARS
        assert text.startswith("word word")

    def test_custom_bound(self):
        assert sanitize_html(html_page("<p>abcdefghij</p>"), max_chars=4) == "abcd"

    def test_empty_page_yields_placeholder(self):
        assert sanitize_html(html_page("<script>only()</script>")) == NO_CONTENT
        assert sanitize_html("") == NO_CONTENT

    def test_document_without_body(self):
        assert sanitize_html("plain text, no markup") == "plain text, no markup"

    @settings(max_examples=60, deadline=None)
    @given(body=page_text)
    def test_bounded_and_non_empty(self, body):
        text = sanitize_html(html_page(body))
        assert 0 < len(text) <= MAX_CONTENT_CHARS
        assert text == text.strip()
        assert "  " not in text


# ---------------------------------------------------------------------------
# ContentFetcher
# ---------------------------------------------------------------------------


class TestContentFetcher:
    def test_success(self, pages, fetcher):
        pages[URL] = (200, html_page("<p>Top story</p>"))
        result = fetcher.fetch(URL)
        assert result.ok
        assert result.text == "Top story"
        assert result.status_code == 200
        assert result.error == ""

    @pytest.mark.parametrize("status", [403, 404, 500, 503])
    def test_non_success_status(self, pages, fetcher, status):
        pages[URL] = (status, html_page("<p>nope</p>"))
        result = fetcher.fetch(URL)
        assert not result.ok
        assert result.status_code == status
        assert result.error == f"Error: HTTP {status} for {URL}"

    def test_unknown_page_is_404(self, fetcher):
        result = fetcher.fetch("https://missing.example/")
        assert not result.ok
        assert "404" in result.error
        assert "https://missing.example/" in result.error

    def test_transport_failure_does_not_raise(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with ContentFetcher(transport=httpx.MockTransport(handler)) as fetcher:
            result = fetcher.fetch(URL)
        assert not result.ok
        assert result.error == "Error: connection refused"
        assert result.status_code is None

    def test_invalid_url_does_not_raise(self, fetcher):
        result = fetcher.fetch("not a url")
        assert not result.ok
        assert result.error.startswith("Error: ")

    def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == "https://news.example/old":
                return httpx.Response(301, headers={"Location": URL})
            return httpx.Response(200, text=html_page("<p>Moved here</p>"))

        with ContentFetcher(transport=httpx.MockTransport(handler)) as f:
            result = f.fetch("https://news.example/old")
        assert result.ok
        assert result.text == "Moved here"

    def test_sends_user_agent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers.get("user-agent")
            return httpx.Response(200, text=html_page("<p>ok</p>"))

        with ContentFetcher(user_agent="briefbot/1", transport=httpx.MockTransport(handler)) as f:
            f.fetch(URL)
        assert seen["ua"] == "briefbot/1"

    def test_respects_max_chars(self, pages):
        pages[URL] = (200, html_page("<p>" + "x" * 100 + "</p>"))
        with ContentFetcher(max_chars=10, transport=make_transport(pages)) as f:
            assert f.fetch(URL).text == "x" * 10
