"""
Tests for the browser session helpers.
"""

from unittest.mock import MagicMock, call

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException

from review_scraper import browser, config
from review_scraper.browser import (
    create_driver,
    navigate,
    save_screenshot,
    scroll_to_bottom,
    wait_for_selector,
)


def test_create_driver_installs_stealth_overrides(monkeypatch, tmp_path):
    fake_uc = MagicMock()
    monkeypatch.setattr(browser, "uc", fake_uc)

    driver = create_driver(headless=True, profile_dir=tmp_path)

    fake_uc.Chrome.assert_called_once_with(
        options=fake_uc.ChromeOptions.return_value, headless=True
    )
    assert driver is fake_uc.Chrome.return_value
    driver.execute_cdp_cmd.assert_called_once_with(
        "Page.addScriptToEvaluateOnNewDocument", {"source": config.STEALTH_SCRIPT}
    )
    driver.set_page_load_timeout.assert_called_once_with(config.PAGE_LOAD_TIMEOUT_S)
    options = fake_uc.ChromeOptions.return_value
    options.add_argument.assert_any_call(f"--user-data-dir={tmp_path}")


def test_navigate_retries_then_succeeds(monkeypatch):
    sleeps = []
    monkeypatch.setattr(browser, "sleep", sleeps.append)
    driver = MagicMock()
    driver.get.side_effect = [WebDriverException("timeout"), None]

    navigate(driver, "https://example.com")

    assert driver.get.call_count == 2
    assert sleeps == [config.NAVIGATION_RETRY_DELAY_S]


def test_navigate_raises_after_last_attempt(no_sleep):
    driver = MagicMock()
    driver.get.side_effect = WebDriverException("timeout")

    with pytest.raises(WebDriverException):
        navigate(driver, "https://example.com")

    assert driver.get.call_count == config.NAVIGATION_RETRIES


def test_scroll_to_bottom_stops_at_end_of_document(no_sleep):
    driver = MagicMock()
    driver.execute_script.side_effect = lambda script, *args: (
        400 if "scrollHeight" in script else None
    )

    scroll_to_bottom(driver, step=150, delay=0.1)

    scroll_calls = [
        c for c in driver.execute_script.call_args_list if "scrollBy" in c.args[0]
    ]
    assert scroll_calls == [call("window.scrollBy(0, arguments[0]);", 150)] * 3


def test_wait_for_selector_returns_false_on_timeout(monkeypatch):
    fake_wait = MagicMock()
    fake_wait.return_value.until.side_effect = TimeoutException()
    monkeypatch.setattr(browser, "WebDriverWait", fake_wait)

    assert wait_for_selector(MagicMock(), "div.review", 1) is False


def test_save_screenshot_logs_failures(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "SCREENSHOT_DIR", tmp_path)
    driver = MagicMock()
    driver.save_screenshot.side_effect = WebDriverException("no window")

    assert save_screenshot(driver, "g2_error_1.png") is None


def test_save_screenshot_writes_into_screenshot_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "SCREENSHOT_DIR", tmp_path / "shots")
    driver = MagicMock()

    path = save_screenshot(driver, "g2_blocked_page_2.png")

    assert path == tmp_path / "shots" / "g2_blocked_page_2.png"
    driver.save_screenshot.assert_called_once_with(str(path))


def test_save_screenshot_survives_dead_driver(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "SCREENSHOT_DIR", tmp_path)
    driver = MagicMock()
    driver.save_screenshot.side_effect = ConnectionRefusedError("chromedriver is gone")

    assert save_screenshot(driver, "g2_error_3.png") is None
