"""
Configuration settings for the review scraper.

Site URLs, selectors, timeouts and browser settings live here so the
scrapers stay free of magic values.
"""

from pathlib import Path

# Paths
OUTPUT_DIR = Path("Output")
SCREENSHOT_DIR = Path(".")
CHROME_PROFILE_DIR = Path("chrome_profile")

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Browser
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
WINDOW_SIZE = (1366, 768)
BROWSER_LANGUAGE = "en-US"
PAGE_LOAD_TIMEOUT_S = 60

# G2 runs visible, Capterra headless
DEFAULT_HEADLESS = {"g2": False, "capterra": True}

STEALTH_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
window.chrome = { runtime: {}, loadTimes: () => ({}), csi: () => ({}) };
const originalQuery = window.navigator.permissions.query;
window.navigator.permissions.query = (parameters) =>
  parameters.name === 'notifications'
    ? Promise.resolve({ state: Notification.permission })
    : originalQuery(parameters);
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3] });
Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
Object.defineProperty(navigator, 'hardwareConcurrency', { get: () => 8 });
Object.defineProperty(navigator, 'deviceMemory', { get: () => 8 });
"""

# Navigation
NAVIGATION_RETRIES = 3
NAVIGATION_RETRY_DELAY_S = 3

# Block / CAPTCHA markers, matched against lower-cased visible page text
BLOCK_TEXT_MARKERS = {
    "access_blocked": ("access blocked", "access denied"),
    "unusual_activity": ("unusual activity",),
    "verification": (
        "verify you are human",
        "verification required",
        "are you a human",
        "are you human",
        "prove you're human",
    ),
    "captcha": ("captcha", "i'm not a robot", "i am not a robot"),
    "cloudflare": ("just a moment", "checking your browser"),
}
# Matched against the raw HTML (challenge widgets carry no visible text)
BLOCK_HTML_MARKERS = {
    "recaptcha": ("g-recaptcha",),
    "hcaptcha": ("h-captcha",),
    "cloudflare": ("cf-turnstile",),
    "funcaptcha": ("funcaptcha", "arkoselabs"),
}

# G2
G2_REVIEWS_URL = "https://www.g2.com/products/{slug}/reviews"
G2_REVIEW_CARD_SELECTOR = '[data-testid="review-card"]'
G2_TITLE_SELECTOR = '[data-testid="review-title"]'
G2_BODY_SELECTOR = '[data-testid="review-body"]'
G2_REVIEWER_SELECTOR = '[data-testid="consumer-name"]'
G2_RATING_SELECTOR = '[itemprop="ratingValue"]'
G2_DATE_SELECTOR = '[data-testid="review-date"]'
G2_NEXT_PAGE_SELECTOR = "li.next:not(.disabled) a"
G2_DATE_FORMAT = "%B %d, %Y"  # "January 5, 2024"
G2_DATE_PREFIX = "Reviewed on "
G2_REVIEW_WAIT_TIMEOUT_S = 15
G2_NEXT_PAGE_TIMEOUT_S = 30
G2_SCROLL_STEP_PX = 150
G2_SCROLL_DELAY_S = 0.1
G2_SCROLL_JITTER_S = 0.03
G2_SETTLE_PAUSE_S = (0.5, 0.8)
G2_PAGE_PAUSE_S = (2.0, 4.0)

# Capterra
CAPTERRA_SEARCH_URL = "https://www.capterra.com/search/?query={query}"
CAPTERRA_PRODUCT_LINK_SELECTOR = 'a[href*="/p/"]'
CAPTERRA_REVIEW_CARD_SELECTOR = "div.e1xzmg0z.c1ofrhif"
CAPTERRA_DATE_SELECTOR = ".typo-0"
CAPTERRA_TITLE_SELECTOR = "h3.typo-20"
CAPTERRA_REVIEWER_SELECTOR = "span.typo-20"
CAPTERRA_RATING_SELECTOR = 'div[data-testid="rating"] > span:last-of-type'
CAPTERRA_PRODUCT_WAIT_TIMEOUT_S = 30
CAPTERRA_REVIEW_WAIT_TIMEOUT_S = 10
CAPTERRA_SCROLL_PASSES = 2
CAPTERRA_SCROLL_STEP_PX = 300
CAPTERRA_SCROLL_DELAY_S = 0.3
