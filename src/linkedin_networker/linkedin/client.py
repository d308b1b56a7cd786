# ABOUTME: Playwright-backed LinkedIn browser client used by the crawler.
# ABOUTME: Handles launch, login classification, navigation, scrolling and page capture.

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from linkedin_networker.auth.credential_manager import LinkedInCredentials
from linkedin_networker.config import Settings
from linkedin_networker.linkedin.exceptions import (
    LinkedInAuthError,
    LinkedInChallengeError,
    LinkedInDriverError,
    LinkedInError,
    LinkedInTimeoutError,
)
from linkedin_networker.linkedin.urls import LOGIN_URL

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class LoginOutcome(str, Enum):
    """Where LinkedIn sent the browser after the login form was submitted."""

    AUTHENTICATED = "authenticated"
    CHALLENGE = "challenge"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


def classify_login_url(url: str) -> LoginOutcome:
    """Classify the post-login URL.

    Args:
        url: The page URL after submitting the login form.

    Returns:
        CHALLENGE for security checkpoints, REJECTED when still on a login
        page, AUTHENTICATED for the feed or a profile, UNKNOWN otherwise.
    """
    if "/challenge" in url:
        return LoginOutcome.CHALLENGE
    if "/login" in url or "/uas/login" in url or "/checkpoint/lg/" in url:
        return LoginOutcome.REJECTED
    if "linkedin.com/feed" in url or "linkedin.com/in/" in url:
        return LoginOutcome.AUTHENTICATED
    return LoginOutcome.UNKNOWN


class LinkedInClient:
    """One browser session driving a single LinkedIn page.

    The crawler relies on exactly one loaded document at a time, so every
    method operates on the same page and must be awaited in sequence.
    """

    USER_AGENT = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    VIEWPORT = {"width": 1366, "height": 768}
    NAVIGATION_LANDMARK = 'nav[aria-label="Primary Navigation"]'
    LOGIN_FORM_SETTLE_MS = 2000
    LOGIN_RESULT_SETTLE_MS = 3000
    LOGIN_NAVIGATION_TIMEOUT_MS = 20000

    def __init__(self, settings: Settings, sleep: Sleep = asyncio.sleep) -> None:
        """Create a client; the browser is launched by start().

        Args:
            settings: Application settings (headless flag, timeouts, pauses).
            sleep: Coroutine used for fixed pauses, replaceable in tests.
        """
        self._settings = settings
        self._sleep = sleep
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    @property
    def is_started(self) -> bool:
        """Return True while a page is open."""
        return self._page is not None

    @property
    def url(self) -> str:
        """Return the URL of the currently loaded document."""
        return self._page.url if self._page is not None else ""

    def _require_page(self) -> Page:
        if self._page is None:
            raise LinkedInDriverError("Browser is not running")
        return self._page

    def _wrap_exception(self, exception: Exception) -> LinkedInError:
        """Convert a Playwright exception to the appropriate LinkedIn exception type.

        Args:
            exception: The original exception from Playwright.

        Returns:
            The appropriate LinkedInError subclass for the exception.
        """
        if isinstance(exception, PlaywrightTimeoutError):
            return LinkedInTimeoutError(str(exception))

        error_message = str(exception).lower()
        if (
            "target closed" in error_message
            or "has been closed" in error_message
            or "disconnected" in error_message
        ):
            return LinkedInDriverError(str(exception))

        return LinkedInError(str(exception))

    async def start(self) -> None:
        """Launch Chromium and open the page used for the whole crawl.

        Raises:
            LinkedInDriverError: If the browser cannot be launched.
        """
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._settings.headless,
                timeout=self._settings.launch_timeout_ms,
            )
            context = await self._browser.new_context(
                user_agent=self.USER_AGENT,
                viewport=self.VIEWPORT,  # type: ignore[arg-type]
            )
            self._page = await context.new_page()
        except PlaywrightError as e:
            await self.close()
            raise LinkedInDriverError(f"Could not launch browser: {e}") from e

        self._page.set_default_timeout(self._settings.selector_timeout_ms)
        self._page.set_default_navigation_timeout(self._settings.navigation_timeout_ms)

    async def login(self, credentials: LinkedInCredentials) -> None:
        """Submit the login form and verify where LinkedIn lands.

        Args:
            credentials: Email and password for the account.

        Raises:
            LinkedInChallengeError: If LinkedIn asks for a security challenge.
            LinkedInAuthError: If the credentials are rejected, the form cannot
                be used, or the post-login page is unrecognized.
        """
        page = self._require_page()
        logger.info("Navigating to LinkedIn login page")
        try:
            await page.goto(LOGIN_URL, wait_until="domcontentloaded")
            await self.wait(self.LOGIN_FORM_SETTLE_MS)

            await page.wait_for_selector("#username", timeout=self._settings.selector_timeout_ms)
            await page.wait_for_selector("#password", timeout=self._settings.selector_timeout_ms)
            await page.fill("#username", credentials.email)
            await page.fill("#password", credentials.password)

            async with page.expect_navigation(timeout=self.LOGIN_NAVIGATION_TIMEOUT_MS):
                await page.click('button[type="submit"]')
            await self.wait(self.LOGIN_RESULT_SETTLE_MS)
        except PlaywrightError as e:
            raise LinkedInAuthError(f"Login failed: {e}") from e

        current_url = page.url
        logger.info("URL after login attempt: %s", current_url)
        outcome = classify_login_url(current_url)

        if outcome is LoginOutcome.CHALLENGE:
            raise LinkedInChallengeError(
                "LinkedIn security challenge required. Please login manually first."
            )
        if outcome is LoginOutcome.REJECTED:
            raise LinkedInAuthError("Login failed. Please check your credentials.")
        if outcome is LoginOutcome.AUTHENTICATED:
            logger.info("Login successful")
            return
        if await self.has_element(self.NAVIGATION_LANDMARK):
            logger.info("Login successful (navigation landmark found)")
            return

        raise LinkedInAuthError(f"Login status unclear. Current URL: {current_url}")

    async def goto(self, url: str) -> None:
        """Navigate to a URL and pause for client-side rendering.

        Raises:
            LinkedInTimeoutError: If navigation exceeds the configured timeout.
            LinkedInError: For other navigation failures.
        """
        page = self._require_page()
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._settings.navigation_timeout_ms,
            )
        except PlaywrightError as e:
            raise self._wrap_exception(e) from e
        await self.wait(self._settings.page_settle_ms)

    async def scroll_to_load(self, iterations: int | None = None) -> None:
        """Scroll to the bottom repeatedly so lazy results get rendered."""
        page = self._require_page()
        count = self._settings.scroll_iterations if iterations is None else iterations
        for _ in range(count):
            try:
                await page.evaluate("window.scrollTo(0, document.body.scrollHeight)")
            except PlaywrightError as e:
                raise self._wrap_exception(e) from e
            await self.wait(self._settings.scroll_wait_ms)

    async def content(self) -> str:
        """Return the serialized markup of the loaded document."""
        page = self._require_page()
        try:
            return await page.content()
        except PlaywrightError as e:
            raise self._wrap_exception(e) from e

    async def has_element(self, selector: str) -> bool:
        """Return True if at least one element matches the selector."""
        page = self._require_page()
        try:
            return await page.locator(selector).count() > 0
        except PlaywrightError as e:
            raise self._wrap_exception(e) from e

    async def wait(self, milliseconds: int) -> None:
        """Pause for a fixed number of milliseconds."""
        await self._sleep(milliseconds / 1000)

    async def close(self) -> None:
        """Close the browser. Safe to call more than once or before start()."""
        browser, playwright = self._browser, self._playwright
        self._page = None
        self._browser = None
        self._playwright = None

        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as e:
                logger.debug("Browser was already closed: %s", e)
        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                logger.debug("Playwright driver was already stopped: %s", e)
