"""
Shared fixtures: a fake WebDriver serving canned HTML per URL.
"""

import pytest
from selenium.common.exceptions import WebDriverException


class FakeDriver:
    """Minimal stand-in for a Selenium driver backed by a URL -> HTML map."""

    def __init__(self, pages=None, failing_urls=(), error=None):
        self.pages = pages or {}
        self.failing_urls = set(failing_urls)
        self.error = error or WebDriverException("net::ERR_CONNECTION_RESET")
        self.current_url = None
        self.visited = []

    def get(self, url):
        self.visited.append(url)
        if url in self.failing_urls:
            raise self.error
        self.current_url = url

    @property
    def page_source(self):
        return self.pages.get(self.current_url, "<html><body></body></html>")

    def find_elements(self, by, selector):
        return []


def g2_card(title, date, body="Easy to set up.", reviewer="Jane D.", rating="4.5"):
    return f"""
    <div data-testid="review-card">
      <div data-testid="review-title">{title}</div>
      <div data-testid="review-body">{body}</div>
      <span data-testid="consumer-name">{reviewer}</span>
      <meta itemprop="ratingValue" content="{rating}">
      <div data-testid="review-date">Reviewed on {date}</div>
    </div>
    """


def g2_page(*cards):
    return f"<html><body><h1>Acme Reviews</h1>{''.join(cards)}</body></html>"


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip real sleeps in the browser helpers."""
    monkeypatch.setattr("review_scraper.browser.sleep", lambda seconds: None)
