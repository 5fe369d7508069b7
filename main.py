"""
Review Scraper

A CLI tool for scraping company reviews from G2 and Capterra within a
date range. See review_scraper/cli.py for the arguments.
"""

from review_scraper.cli import main


if __name__ == "__main__":
    main()
