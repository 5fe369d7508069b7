"""
Utility functions for the review scraper.
"""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from bs4 import BeautifulSoup
from dateutil import parser as dateutil_parser

from . import config

logger = logging.getLogger(__name__)

# Fields missing from a date string fall back to January 1st
PARSE_DEFAULT = datetime(1900, 1, 1)


def clean_text(elem, default=""):
    """Visible text of an element with whitespace collapsed, or default."""
    if elem is None:
        return default
    return " ".join(elem.get_text(" ").split()) or default


def detect_block_markers(html_content, ignore_selector=None):
    """
    Detect block pages and CAPTCHAs in page HTML.

    Visible text is checked against the text markers, raw HTML against
    the challenge widget hooks.

    Args:
        html_content: Raw HTML string of the current page
        ignore_selector: CSS selector for user content (e.g. review cards)
            left out of the text check

    Returns:
        List of detected marker group names, empty if the page looks clean
    """
    if not html_content:
        return []

    soup = BeautifulSoup(html_content, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    if ignore_selector:
        for tag in soup.select(ignore_selector):
            tag.decompose()
    visible_text = soup.get_text(" ", strip=True).lower()
    raw_html = html_content.lower()

    detected = []
    for name, markers in config.BLOCK_TEXT_MARKERS.items():
        if any(marker in visible_text for marker in markers):
            detected.append(name)
    for name, markers in config.BLOCK_HTML_MARKERS.items():
        if name not in detected and any(marker in raw_html for marker in markers):
            detected.append(name)

    return detected


def parse_date(value):
    """
    Parse a date-like value into a naive datetime.

    Aware datetimes are converted to UTC first. Returns None when the
    value is empty or cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = dateutil_parser.parse(value.strip(), default=PARSE_DEFAULT)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso(value):
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def is_within_date_range(date_value, start, end):
    """Return True if date_value falls within [start, end], bounds included."""
    review_date = parse_date(date_value)
    start_date = parse_date(start)
    end_date = parse_date(end)
    if review_date is None or start_date is None or end_date is None:
        return False
    return start_date <= review_date <= end_date


def filter_by_date(reviews, start, end):
    """Filter reviews to only include those within date range."""
    return [
        review
        for review in reviews
        if is_within_date_range(review.get("date"), start, end)
    ]


def normalize_review_dates(reviews):
    """
    Rewrite every review date as an ISO-8601 string.

    Reviews whose date cannot be parsed are dropped.
    """
    normalized = []
    for review in reviews:
        parsed = parse_date(review.get("date"))
        if parsed is None:
            logger.debug(f"Dropping review with invalid date: {review.get('date')!r}")
            continue
        normalized.append({**review, "date": to_iso(parsed)})
    return normalized


def validate_date_range(start, end):
    """
    Validate a start/end date pair.

    Args:
        start: Start date string (YYYY-MM-DD)
        end: End date string (YYYY-MM-DD)

    Returns:
        True if valid, or error message string if invalid
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return "Invalid date. Please use 'YYYY-MM-DD'."
    if start_date > end_date:
        return "Start date cannot be after end date."
    return True


def output_path(output_dir, company, source):
    """Build the JSON output path for a company/source pair."""
    safe_company = company.replace("/", "-")
    return Path(output_dir) / f"{safe_company}_{source}_reviews.json"


def save_to_file(data, filepath):
    """Write data as pretty-printed JSON, creating parent directories."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(data)} reviews to {filepath}")
    return filepath
