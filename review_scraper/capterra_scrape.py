"""
Capterra review scraping functionality.
"""

import logging
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup

from . import config
from .browser import navigate, scroll_to_bottom, wait_for_selector
from .exceptions import BlockedError, ProductNotFoundError, ScraperError
from .utils import clean_text, detect_block_markers

logger = logging.getLogger(__name__)


def extract_product_link(html_content, base_url):
    """
    Find the first product link in Capterra search results HTML.

    Args:
        html_content: Raw HTML string from the Capterra search page
        base_url: URL the page was loaded from, used to resolve relative links

    Returns:
        Absolute product URL, or None if the page has no product links
    """
    soup = BeautifulSoup(html_content, "html.parser")
    link = soup.select_one(config.CAPTERRA_PRODUCT_LINK_SELECTOR)
    if not link or not link.get("href"):
        return None
    return urljoin(base_url, link["href"])


def reviews_url(product_url):
    return product_url.rstrip("/") + "/reviews"


def extract_reviews(html_content):
    """Extract reviews from Capterra HTML content into structured JSON format."""
    soup = BeautifulSoup(html_content, "html.parser")
    reviews = []

    for card in soup.select(config.CAPTERRA_REVIEW_CARD_SELECTOR):
        rating = clean_text(card.select_one(config.CAPTERRA_RATING_SELECTOR))
        reviews.append(
            {
                "date": clean_text(
                    card.select_one(config.CAPTERRA_DATE_SELECTOR), "Unknown"
                ),
                "title": clean_text(card.select_one(config.CAPTERRA_TITLE_SELECTOR)),
                "review": clean_text(card.find("p")),
                "rating": rating or None,
                "reviewer": clean_text(
                    card.select_one(config.CAPTERRA_REVIEWER_SELECTOR), "Anonymous"
                ),
                "source": "Capterra",
            }
        )

    return reviews


def capterra_scrape(driver, company):
    """
    Scrape the first page of Capterra reviews for a company.

    Takes the first product in the search results, opens its reviews tab
    and scrolls until the lazy-loaded cards render. Only one page of
    reviews is collected; date filtering is left to the caller.

    Args:
        driver: Selenium WebDriver instance
        company: Company name to search for

    Returns:
        List of review dictionaries, empty on any scraping error
    """
    search_url = config.CAPTERRA_SEARCH_URL.format(query=quote(company, safe=""))

    try:
        logger.info(f"Searching for: {company}")
        navigate(driver, search_url, retries=1)

        markers = detect_block_markers(driver.page_source)
        if markers:
            raise BlockedError(
                f"CAPTCHA or Access Blocked by Capterra ({', '.join(markers)})."
            )

        if not wait_for_selector(
            driver,
            config.CAPTERRA_PRODUCT_LINK_SELECTOR,
            config.CAPTERRA_PRODUCT_WAIT_TIMEOUT_S,
        ):
            raise ProductNotFoundError(f"No product link found for {company}")

        product_url = extract_product_link(driver.page_source, driver.current_url)
        if not product_url:
            raise ProductNotFoundError(f"No product link found for {company}")

        target = reviews_url(product_url)
        logger.info(f"Navigating to reviews page: {target}")
        navigate(driver, target, retries=1)

        if not wait_for_selector(
            driver,
            config.CAPTERRA_REVIEW_CARD_SELECTOR,
            config.CAPTERRA_REVIEW_WAIT_TIMEOUT_S,
        ):
            raise ScraperError(f"No review cards rendered on {target}")

        for _ in range(config.CAPTERRA_SCROLL_PASSES):
            scroll_to_bottom(
                driver, config.CAPTERRA_SCROLL_STEP_PX, config.CAPTERRA_SCROLL_DELAY_S
            )

        reviews = extract_reviews(driver.page_source)
    except Exception as e:
        logger.error(f"Capterra scraping error: {e}")
        return []

    logger.info(f"Extracted {len(reviews)} reviews.")
    return reviews
