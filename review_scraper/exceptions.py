"""
Exceptions raised by the review scrapers.
"""


class ScraperError(Exception):
    """Base class for scraping failures."""


class BlockedError(ScraperError):
    """The site served a block or CAPTCHA page."""


class ProductNotFoundError(ScraperError):
    """No product page could be resolved for the company."""
