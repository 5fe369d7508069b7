"""
Review Scraper - Source modules.
"""

from .utils import (
    detect_block_markers,
    filter_by_date,
    is_within_date_range,
    normalize_review_dates,
    parse_date,
    save_to_file,
    validate_date_range,
)
from .browser import create_driver
from .g2_scrape import g2_scrape
from .capterra_scrape import capterra_scrape

__all__ = [
    "detect_block_markers",
    "filter_by_date",
    "is_within_date_range",
    "normalize_review_dates",
    "parse_date",
    "save_to_file",
    "validate_date_range",
    "create_driver",
    "g2_scrape",
    "capterra_scrape",
]
