"""
Browser session helpers shared by the scrapers.
"""

import logging
import os
import random
from time import sleep

import undetected_chromedriver as uc
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.actions.action_builder import ActionBuilder
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from . import config

logger = logging.getLogger(__name__)


def create_driver(headless=False, profile_dir=None):
    """
    Start Chrome with a persistent profile and the stealth overrides installed.

    Args:
        headless: Run without a visible window
        profile_dir: Chrome user data directory, defaults to ./chrome_profile

    Returns:
        undetected_chromedriver Chrome instance
    """
    user_data_dir = os.path.abspath(profile_dir or config.CHROME_PROFILE_DIR)
    width, height = config.WINDOW_SIZE

    logger.info(f"Starting browser with profile: {user_data_dir}")

    options = uc.ChromeOptions()
    options.add_argument(f"--user-data-dir={user_data_dir}")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_argument(f"--user-agent={config.USER_AGENT}")
    options.add_argument(f"--lang={config.BROWSER_LANGUAGE}")
    options.add_argument(f"--window-size={width},{height}")

    driver = uc.Chrome(options=options, headless=headless)
    driver.set_page_load_timeout(config.PAGE_LOAD_TIMEOUT_S)
    driver.execute_cdp_cmd(
        "Page.addScriptToEvaluateOnNewDocument", {"source": config.STEALTH_SCRIPT}
    )
    logger.debug("Stealth overrides installed")
    return driver


def navigate(
    driver,
    url,
    retries=config.NAVIGATION_RETRIES,
    delay=config.NAVIGATION_RETRY_DELAY_S,
):
    """Load a URL, retrying failed attempts. The last failure is re-raised."""
    for attempt in range(1, retries + 1):
        try:
            driver.get(url)
            return
        except WebDriverException:
            if attempt == retries:
                raise
            logger.warning(f"Attempt {attempt} failed. Retrying...")
            sleep(delay)


def human_pause(low, high):
    sleep(random.uniform(low, high))


def move_mouse_randomly(driver):
    """Move the pointer somewhere in the top-left of the viewport."""
    action = ActionBuilder(driver)
    action.pointer_action.move_to_location(
        random.randint(100, 399), random.randint(100, 399)
    )
    action.perform()


def scroll_to_bottom(driver, step, delay, jitter=0.0):
    """Scroll down in fixed steps until the end of the document is reached."""
    scrolled = 0
    while True:
        driver.execute_script("window.scrollBy(0, arguments[0]);", step)
        scrolled += step
        remaining = driver.execute_script(
            "return document.body.scrollHeight - window.innerHeight;"
        )
        if remaining is None or scrolled >= remaining:
            break
        sleep(delay + random.uniform(0, jitter))


def wait_for_selector(driver, selector, timeout):
    """Wait for an element matching the CSS selector. Returns False on timeout."""
    try:
        WebDriverWait(driver, timeout).until(
            EC.presence_of_element_located((By.CSS_SELECTOR, selector))
        )
        return True
    except TimeoutException:
        return False


def save_screenshot(driver, filename):
    """Save a screenshot into the screenshot directory, returning its path."""
    config.SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
    path = config.SCREENSHOT_DIR / filename
    try:
        driver.save_screenshot(str(path))
    except Exception as e:
        logger.warning(f"Could not save screenshot {path}: {e}")
        return None
    logger.info(f"Screenshot saved to {path}")
    return path
