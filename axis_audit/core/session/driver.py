"""
Session Driver

Drives the authentication sequences (login, registration) that audits run
behind.
"""

import logging
import re
from typing import Optional

from playwright.async_api import Page

logger = logging.getLogger(__name__)

EMAIL_SELECTOR = '[data-testid="email-input"], input[type="email"], input[name="email"]'
PASSWORD_SELECTOR = '[data-testid="password-input"], input[type="password"], input[name="password"]'
LOGIN_BUTTON_SELECTOR = ('[data-testid="login-submit"], button[type="submit"], '
                         'button:has-text("Sign In"), button:has-text("Login")')

NAME_SELECTOR = '[data-testid="name-input"], input[name="name"]'
CONFIRM_PASSWORD_SELECTOR = '[data-testid="confirm-password-input"], input[name="confirmPassword"]'
REGISTER_BUTTON_SELECTOR = '[data-testid="register-submit"], button[type="submit"]'
TERMS_SELECTOR = 'input[type="checkbox"]'

LOGIN_PATH = '/auth/login'
REGISTER_PATH = '/auth/register'
REGISTERED_URL = re.compile(r"/(dashboard|auth/onboarding|auth/login)")


class AuthenticationError(RuntimeError):
    """Login or registration did not leave the auth pages."""


class SessionDriver:
    """
    Authenticates a page against the application under test.

    Args:
        page: Playwright page
        base_url: Application root, without trailing slash
        settle_ms: Wait after submitting credentials
        timeout: Milliseconds to wait for the post-registration redirect
    """

    def __init__(self, page: Page, base_url: str, settle_ms: int = 5000, timeout: int = 15000):
        self.page = page
        self.base_url = base_url.rstrip('/')
        self.settle_ms = settle_ms
        self.timeout = timeout

    async def goto(self, path: str) -> None:
        await self.page.goto(f"{self.base_url}{path}")
        await self.page.wait_for_load_state('networkidle')

    async def login(self, email: str, password: str) -> None:
        """
        Log in through the login form.

        Raises:
            AuthenticationError: form elements missing, or still on the login page afterwards
        """
        logger.info("🔐 Logging in...")
        await self.goto(LOGIN_PATH)

        email_input = self.page.locator(EMAIL_SELECTOR).first
        password_input = self.page.locator(PASSWORD_SELECTOR).first
        login_button = self.page.locator(LOGIN_BUTTON_SELECTOR).first

        if not (await email_input.count() and await password_input.count() and await login_button.count()):
            raise AuthenticationError('Cannot find login form elements')

        await email_input.fill(email)
        await password_input.fill(password)
        await login_button.click()
        await self.page.wait_for_timeout(self.settle_ms)

        if LOGIN_PATH in self.page.url:
            raise AuthenticationError('Login failed - still on login page')

        logger.info("✅ Login successful")

    async def register(self, email: str, password: str, name: Optional[str] = None) -> None:
        """Create an account through the registration form."""
        logger.info(f"📝 Registering {email}...")
        await self.goto(REGISTER_PATH)

        if name:
            await self.page.locator(NAME_SELECTOR).first.fill(name)
        await self.page.locator(EMAIL_SELECTOR).first.fill(email)
        await self.page.locator(PASSWORD_SELECTOR).first.fill(password)

        confirm = self.page.locator(CONFIRM_PASSWORD_SELECTOR).first
        if await confirm.count():
            await confirm.fill(password)

        terms = self.page.locator(TERMS_SELECTOR).first
        if await terms.count() and await terms.is_visible():
            await terms.check()
            await self.page.wait_for_timeout(500)

        await self.page.locator(REGISTER_BUTTON_SELECTOR).first.click()

        try:
            await self.page.wait_for_url(REGISTERED_URL, timeout=self.timeout)
        except Exception as e:
            raise AuthenticationError(f"Registration did not complete: {e}") from e

        logger.info(f"✅ Registration finished at {self.page.url}")

    async def audit_login_form(self, aggregator, email: str, password: str) -> bool:
        """
        Login that reports instead of raising.

        Missing login controls and a failed login become critical bugs.
        Returns True when the session ended up authenticated.
        """
        try:
            await self.goto(LOGIN_PATH)
        except Exception as e:
            await aggregator.report_bug(LOGIN_PATH, 'Login Page', f"Login page failed to load: {e}", 'critical')
            return False

        controls = [
            (EMAIL_SELECTOR, 'Email Input', 'Email input field not found'),
            (PASSWORD_SELECTOR, 'Password Input', 'Password input field not found'),
            (LOGIN_BUTTON_SELECTOR, 'Login Button', 'Login button not found'),
        ]
        missing = False
        for selector, element, issue in controls:
            if await self.page.locator(selector).count() == 0:
                await aggregator.report_bug(LOGIN_PATH, element, issue, 'critical')
                missing = True
        if missing:
            return False

        try:
            await self.login(email, password)
            return True
        except AuthenticationError as e:
            await aggregator.report_bug(LOGIN_PATH, 'Login Process', str(e), 'critical')
            return False
        except Exception as e:
            await aggregator.report_bug(LOGIN_PATH, 'Login Process', f"Login error: {e}", 'critical')
            return False
