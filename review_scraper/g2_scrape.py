"""
G2 review scraping functionality.
"""

import logging
import re
from datetime import datetime

from bs4 import BeautifulSoup
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from . import config
from .browser import (
    human_pause,
    move_mouse_randomly,
    navigate,
    save_screenshot,
    scroll_to_bottom,
    wait_for_selector,
)
from .utils import (
    clean_text,
    detect_block_markers,
    is_within_date_range,
    parse_date,
    to_iso,
)

logger = logging.getLogger(__name__)


def company_slug(company):
    """Turn a company name into its G2 product slug."""
    return re.sub(r"\s+", "-", company.strip().lower())


def _text(card, selector, default):
    return clean_text(card.select_one(selector), default)


def extract_reviews(html_content):
    """Extract raw review fields from every G2 review card in the HTML."""
    soup = BeautifulSoup(html_content, "html.parser")
    reviews = []

    for card in soup.select(config.G2_REVIEW_CARD_SELECTOR):
        rating_elem = card.select_one(config.G2_RATING_SELECTOR)
        raw_date = _text(card, config.G2_DATE_SELECTOR, "")
        reviews.append(
            {
                "title": _text(card, config.G2_TITLE_SELECTOR, "No Title"),
                "description": _text(card, config.G2_BODY_SELECTOR, ""),
                "reviewer": _text(card, config.G2_REVIEWER_SELECTOR, "Anonymous"),
                "rating": rating_elem.get("content", "0") if rating_elem else "0",
                "date": raw_date.replace(config.G2_DATE_PREFIX, "").strip(),
            }
        )

    return reviews


def parse_review_date(date_string):
    """Parse G2's display date ("January 5, 2024") to a datetime object."""
    try:
        return datetime.strptime(date_string.strip(), config.G2_DATE_FORMAT)
    except (AttributeError, ValueError):
        return None


def is_not_found_page(html_content):
    """Check whether the page heading reports a missing product."""
    heading = BeautifulSoup(html_content, "html.parser").find("h1")
    return bool(heading) and "page not found" in heading.get_text().lower()


def is_server_error_page(html_content):
    return '<h1 class="error-text-number">500</h1>' in html_content


def go_to_next_page(driver):
    """
    Click the enabled "next" pagination link and wait for the page to change.

    Returns:
        bool: False when there is no next page
    """
    buttons = driver.find_elements(By.CSS_SELECTOR, config.G2_NEXT_PAGE_SELECTOR)
    if not buttons:
        return False

    button = buttons[0]
    button.click()
    try:
        WebDriverWait(driver, config.G2_NEXT_PAGE_TIMEOUT_S).until(
            EC.staleness_of(button)
        )
    except TimeoutException:
        logger.warning("Next page did not load after clicking 'next'")
    return True


def g2_scrape(driver, company, start, end):
    """
    Scrape G2 reviews for a company within a date range.

    Pages are walked newest first; the first review older than the start
    date ends the scrape.

    Args:
        driver: Selenium WebDriver instance
        company: Company name, turned into the G2 product slug
        start: Start date (YYYY-MM-DD)
        end: End date (YYYY-MM-DD)

    Returns:
        List of review dictionaries collected so far, even if scraping fails
    """
    slug = company_slug(company)
    base_url = config.G2_REVIEWS_URL.format(slug=slug)
    start_date = parse_date(start)
    end_date = parse_date(end)

    reviews = []
    current_page = 1
    should_stop = False

    logger.info(f"Scraping G2 reviews for {company}...")

    try:
        while not should_stop:
            url = f"{base_url}?page={current_page}"
            logger.info(f"Visiting: {url}")
            navigate(driver, url)

            move_mouse_randomly(driver)
            human_pause(*config.G2_SETTLE_PAUSE_S)

            html_content = driver.page_source
            if is_not_found_page(html_content):
                logger.error(f'Product "{slug}" not found on G2.')
                save_screenshot(driver, f"g2_product_not_found_{slug}.png")
                return []
            if is_server_error_page(html_content):
                logger.info(f"Page {current_page} returned 500 error - no more reviews")
                break

            scroll_to_bottom(
                driver,
                config.G2_SCROLL_STEP_PX,
                config.G2_SCROLL_DELAY_S,
                config.G2_SCROLL_JITTER_S,
            )

            if not wait_for_selector(
                driver, config.G2_REVIEW_CARD_SELECTOR, config.G2_REVIEW_WAIT_TIMEOUT_S
            ):
                logger.warning(f"No reviews found on page {current_page}. Stopping.")
                break

            html_content = driver.page_source
            markers = detect_block_markers(
                html_content, ignore_selector=config.G2_REVIEW_CARD_SELECTOR
            )
            if markers:
                logger.error(f"Blocked by G2 ({', '.join(markers)}).")
                save_screenshot(driver, f"g2_blocked_page_{current_page}.png")
                break

            for raw in extract_reviews(html_content):
                review_date = parse_review_date(raw["date"])
                if review_date is None:
                    logger.warning(f"Invalid date format: {raw['date']!r}")
                    continue

                # Listing is newest first, nothing further back can match
                if review_date < start_date:
                    should_stop = True
                    break

                if is_within_date_range(review_date, start_date, end_date):
                    reviews.append(
                        {**raw, "date": to_iso(review_date), "source": "G2"}
                    )

            if should_stop or not go_to_next_page(driver):
                break

            current_page += 1
            human_pause(*config.G2_PAGE_PAUSE_S)

    except Exception as e:
        logger.error(f"Scraping failed: {e}")
        save_screenshot(driver, f"g2_error_{current_page}.png")

    logger.info(f"Found {len(reviews)} reviews for {company}")
    return reviews
