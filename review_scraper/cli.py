"""
Review Scraper

A CLI tool for scraping company reviews from G2 and Capterra within a
date range. Pass every argument on the command line, or add
--interactive to be prompted for the missing ones.
"""

import argparse
import logging
import sys

import questionary

from . import config
from .browser import create_driver
from .capterra_scrape import capterra_scrape
from .g2_scrape import g2_scrape
from .utils import (
    filter_by_date,
    normalize_review_dates,
    output_path,
    save_to_file,
    validate_date_range,
)

logger = logging.getLogger("review_scraper")

SOURCES = ["g2", "capterra"]
USAGE = (
    "Usage: python main.py --company <company_name> --start <YYYY-MM-DD> "
    "--end <YYYY-MM-DD> --source <g2|capterra>"
)


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments with the usage line and exit status 1."""

    def error(self, message):
        print(f"Error: {message}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)


def build_parser():
    parser = UsageArgumentParser(description="Scrape reviews for a company")
    parser.add_argument("--company", type=str, help="Company name to scrape")
    parser.add_argument("--start", type=str, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--source", type=str, help="Source platform (g2 or capterra)"
    )
    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the browser headless (default: g2 visible, capterra headless)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(config.OUTPUT_DIR),
        help="Directory for the JSON output",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for any missing argument instead of failing",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )


def prompt_missing(args):
    """Fill in missing arguments via TUI prompts."""
    if not args.source:
        args.source = questionary.select(
            "Select source platform:", choices=SOURCES
        ).ask()
    if not args.company:
        args.company = questionary.text(
            "Enter company name:",
            validate=lambda text: (
                True if text.strip() else "Company name cannot be empty"
            ),
        ).ask()
    if not args.start:
        args.start = questionary.text(
            "Enter start date (YYYY-MM-DD):",
            validate=lambda text: validate_date_range(text, text),
        ).ask()
    if not args.end:
        args.end = questionary.text(
            "Enter end date (YYYY-MM-DD):",
            validate=lambda text: validate_date_range(args.start, text),
        ).ask()
    return args


def validate_args(args):
    """Return an error message for invalid arguments, or None."""
    if not (args.company and args.start and args.end and args.source):
        return "You must provide --company, --start, --end, and --source"
    if args.source.lower() not in SOURCES:
        return f"Invalid source '{args.source}'. Use g2 or capterra."
    result = validate_date_range(args.start, args.end)
    if result is not True:
        return result
    return None


def preview_dates(reviews, count=5):
    logger.info("Preview of extracted review dates:")
    for i, review in enumerate(reviews[:count], start=1):
        logger.info(f"#{i}: {review['date']}")


def run_scraper(source, company, start, end, headless):
    """Launch the browser, run the selected scraper and always quit the browser."""
    driver = create_driver(headless=headless)
    try:
        if source == "g2":
            return g2_scrape(driver, company, start, end)
        return capterra_scrape(driver, company)
    finally:
        driver.quit()


def main(argv=None):
    """
    Main entry point for the review scraper.

    Exits with status 1 on invalid arguments or when scraping fails
    outright; partial results are still written.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.interactive:
        prompt_missing(args)

    error = validate_args(args)
    if error:
        parser.error(error)

    source = args.source.lower()
    headless = (
        args.headless if args.headless is not None else config.DEFAULT_HEADLESS[source]
    )

    logger.info(
        f"Scraping {source} reviews for {args.company} from {args.start} to {args.end}..."
    )

    try:
        reviews = run_scraper(source, args.company, args.start, args.end, headless)
    except Exception as e:
        logger.error(f"Scraping failed: {e}")
        sys.exit(1)

    reviews = normalize_review_dates(reviews)
    preview_dates(reviews)

    filtered = filter_by_date(reviews, args.start, args.end)
    save_to_file(filtered, output_path(args.output_dir, args.company, source))
