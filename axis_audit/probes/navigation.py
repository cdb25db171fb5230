"""
Navigation probe.
"""

import logging

from .base import BaseProbe

logger = logging.getLogger(__name__)


class NavigationProbe(BaseProbe):
    """Checks where the browser landed and waits out loading indicators."""

    async def check(self, expected_url: str, page_name: str) -> bool:
        await self.settle(self.config.navigation_settle)

        current_url = self.page.url
        ok = expected_url in current_url
        if not ok:
            await self.report(page_name, 'Navigation',
                              f"Expected URL containing '{expected_url}', got '{current_url}'", 'high')

        try:
            if await self.page.locator(self.config.loading_selector).count() > 0:
                logger.info(f"⏳ {page_name} still loading, waiting...")
                await self.settle(self.config.loading_settle)
        except Exception as e:
            logger.debug(f"Loading indicator check failed: {e}")

        return ok

    async def round_trip(self, page_name: str) -> bool:
        """Browser back then forward; the page should come back."""
        try:
            url = self.page.url
            await self.page.go_back()
            await self.settle(self.config.history_settle)
            await self.page.go_forward()
            await self.settle(self.config.history_settle)

            if self.page.url != url:
                await self.report(page_name, 'Browser History',
                                  f"Back/forward did not return to {url} (got {self.page.url})", 'medium')
                return False
            return True

        except Exception as e:
            await self.report(page_name, 'Browser History', f"History navigation failed: {e}", 'medium')
            return False
