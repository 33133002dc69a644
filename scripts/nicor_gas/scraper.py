"""
Nicor Gas portal login using Playwright.

Logs into the Southern Company customer portal, opens the account and
captures the session cookies so bills can be requested over plain HTTP.
Portal URL: https://customerportal.southerncompany.com
"""
import logging
import os
from pathlib import Path
from typing import Optional

from playwright.sync_api import sync_playwright, Page, Browser, Error as PlaywrightError

from .errors import AuthenticationError
from .fetcher import BASE_URL
from .models import SessionCredential

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT = 100000


class NicorGasAuthenticator:
    """Browser login for the Nicor Gas portal."""

    LOGIN_URL = f"{BASE_URL}/User/Login?LDC=7"
    PAYMENT_HISTORY_URL = f"{BASE_URL}/Billing/PaymentHistory"

    def __init__(self, account_number: str, screenshot_dir: Optional[str] = None,
                 debug_screenshots: bool = False):
        self.account_number = account_number
        self.screenshot_dir = Path(screenshot_dir) if screenshot_dir else None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None
        # Only save screenshots in debug mode (not in production)
        self.debug_screenshots = debug_screenshots or os.getenv("DEBUG_SCREENSHOTS", "").lower() == "true"

    def _save_screenshot(self, name: str):
        """Save screenshot only if debug mode is enabled."""
        if not (self.debug_screenshots and self.page and self.screenshot_dir):
            return
        try:
            self.screenshot_dir.mkdir(parents=True, exist_ok=True)
            self.page.screenshot(path=str(self.screenshot_dir / name))
        except PlaywrightError as e:
            logger.warning(f"Could not save screenshot {name}: {e}")

    def _setup_browser(self, playwright, headless: bool = True):
        """Set up the browser."""
        self.browser = playwright.chromium.launch(headless=headless)
        context = self.browser.new_context(viewport={"width": 1920, "height": 1080})
        self.page = context.new_page()

    def _login(self, username: str, password: str):
        """Submit the login form and wait for the account list."""
        logger.info(f"Navigating to login page: {self.LOGIN_URL}")
        self.page.goto(self.LOGIN_URL)

        logger.info("Filling login credentials...")
        self.page.locator("#username").fill(username)
        self.page.locator("#inputPassword").fill(password)

        with self.page.expect_navigation(wait_until="networkidle", timeout=NAVIGATION_TIMEOUT):
            self.page.locator("#loginbtn").click()
        logger.info(f"Login submitted. Current URL: {self.page.url}")

    def _open_account(self):
        """Click through to the account so the session is scoped to it."""
        logger.info(f"Opening account {self.account_number}")
        account_link = self.page.locator("a", has_text=self.account_number).first
        with self.page.expect_navigation(wait_until="networkidle", timeout=NAVIGATION_TIMEOUT):
            account_link.click()

        self.page.goto(self.PAYMENT_HISTORY_URL)
        logger.info(f"Account opened. Current URL: {self.page.url}")

    def authenticate(self, username: str, password: str, headless: bool = True) -> SessionCredential:
        """
        Log in and return the portal session cookies.

        Raises:
            AuthenticationError: if any login step fails or no cookies are set
        """
        with sync_playwright() as playwright:
            try:
                self._setup_browser(playwright, headless=headless)
                self._login(username, password)
                self._open_account()
                credential = SessionCredential.from_playwright_cookies(self.page.context.cookies())
            except PlaywrightError as e:
                self._save_screenshot("login_error.png")
                raise AuthenticationError(f"Login failed: {e}") from e
            finally:
                if self.browser:
                    self.browser.close()
                    self.browser = None
                self.page = None

        if not credential:
            raise AuthenticationError("Login did not produce any session cookies")

        logger.info(f"Captured {len(credential.cookies)} session cookies")
        return credential
