"""
Browser Management

Handles Playwright startup, desktop or mobile-device contexts, and cleanup
for audit runs.
"""

import logging
from typing import Dict, Any, Optional

from playwright.async_api import async_playwright, Page, Browser, BrowserContext

from ...config.settings import BrowserConfig

logger = logging.getLogger(__name__)

# Used when the installed Playwright doesn't ship a descriptor for the name.
FALLBACK_DEVICES: Dict[str, Dict[str, Any]] = {
    'iPhone SE': {
        'viewport': {'width': 375, 'height': 667},
        'user_agent': 'Mozilla/5.0 (iPhone; CPU iPhone OS 14_0 like Mac OS X) AppleWebKit/605.1.15 '
                      '(KHTML, like Gecko) Version/14.0 Mobile/15E148 Safari/604.1',
        'is_mobile': True,
        'has_touch': True,
    },
    'iPhone 12': {
        'viewport': {'width': 390, 'height': 844},
        'user_agent': 'Mozilla/5.0 (iPhone; CPU iPhone OS 14_0 like Mac OS X) AppleWebKit/605.1.15 '
                      '(KHTML, like Gecko) Version/14.0 Mobile/15E148 Safari/604.1',
        'is_mobile': True,
        'has_touch': True,
    },
    'iPad': {
        'viewport': {'width': 768, 'height': 1024},
        'user_agent': 'Mozilla/5.0 (iPad; CPU OS 14_0 like Mac OS X) AppleWebKit/605.1.15 '
                      '(KHTML, like Gecko) Version/14.0 Mobile/15E148 Safari/604.1',
        'is_mobile': True,
        'has_touch': True,
    },
    'Galaxy S21': {
        'viewport': {'width': 360, 'height': 800},
        'user_agent': 'Mozilla/5.0 (Linux; Android 11; SM-G991B) AppleWebKit/537.36 '
                      '(KHTML, like Gecko) Chrome/91.0.4472.120 Mobile Safari/537.36',
        'is_mobile': True,
        'has_touch': True,
    },
}


class BrowserManager:
    """
    Manages browser lifecycle for audit runs.

    One browser per manager; each call to ``new_page`` opens a fresh context
    so device emulation never leaks between runs.
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()

        self.playwright = None
        self.browser: Optional[Browser] = None
        self.contexts: list = []
        self.is_setup = False

    async def setup(self) -> None:
        """Start Playwright and launch Chromium."""
        if self.is_setup:
            logger.warning("Browser already setup")
            return

        try:
            logger.info("🚀 Setting up browser...")
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=self.config.headless,
                args=self.config.args
            )
            self.is_setup = True
            logger.info("✅ Browser setup completed")

        except Exception as e:
            logger.error(f"Browser setup failed: {e}")
            await self.cleanup()
            raise

    def context_options(self, device: Optional[str] = None) -> Dict[str, Any]:
        """Context keyword arguments for desktop or a named device."""
        if not device:
            return {
                'viewport': {
                    'width': self.config.viewport_width,
                    'height': self.config.viewport_height
                }
            }

        descriptors = getattr(self.playwright, 'devices', None) or {}
        if device in descriptors:
            return dict(descriptors[device])
        if device in FALLBACK_DEVICES:
            logger.info(f"Using fallback viewport for {device}")
            return dict(FALLBACK_DEVICES[device])
        raise ValueError(f"Unknown device: {device}")

    async def new_page(self, device: Optional[str] = None) -> Page:
        """Open a page in a new context, emulating ``device`` if given."""
        if not self.browser:
            raise RuntimeError("Browser not setup - call setup() first")

        context: BrowserContext = await self.browser.new_context(**self.context_options(device))
        context.set_default_timeout(self.config.timeout)
        self.contexts.append(context)
        return await context.new_page()

    async def close_page(self, page: Page) -> None:
        """Close a page together with its context."""
        context = page.context
        await context.close()
        if context in self.contexts:
            self.contexts.remove(context)

    async def cleanup(self) -> None:
        """Clean up browser resources."""
        try:
            logger.info("🧹 Cleaning up browser...")

            for context in self.contexts:
                await context.close()
            self.contexts = []

            if self.browser:
                await self.browser.close()
                self.browser = None

            if self.playwright:
                await self.playwright.stop()
                self.playwright = None

            self.is_setup = False
            logger.info("✅ Browser cleanup completed")

        except Exception as e:
            logger.warning(f"Error during browser cleanup: {e}")

    async def __aenter__(self) -> 'BrowserManager':
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()
