"""
Element interaction probe.
"""

import logging

from .base import BaseProbe

logger = logging.getLogger(__name__)


class ElementInteractionProbe(BaseProbe):
    """Clicks every element matching a selector and watches for client errors."""

    async def run(self, selector: str, element_name: str, current_page: str) -> bool:
        """
        Click each match of ``selector`` on the current page.

        Args:
            selector: Playwright selector
            element_name: Human-readable name used in bug records
            current_page: Route identifier used in bug records

        Returns:
            False if nothing matched or the probe itself failed, True otherwise
        """
        try:
            elements = self.page.locator(selector)
            count = await elements.count()

            if count == 0:
                await self.report(current_page, element_name, f"Element not found: {selector}", 'low')
                return False

            logger.info(f"🎯 Testing {count} x {element_name} on {current_page}")

            for i in range(count):
                element = elements.nth(i)
                visible = await element.is_visible()
                enabled = await element.is_enabled()

                if not (visible and enabled):
                    await self.report(current_page, element_name,
                                      f"Element not clickable (visible: {visible}, enabled: {enabled})", 'low')
                    continue

                console_mark = self.monitor.console_count
                try:
                    await element.click()
                    await self.settle(self.config.click_settle)
                except Exception as e:
                    await self.report(current_page, element_name, f"Click failed: {e}", 'medium')
                    continue

                new_errors = self.monitor.console_errors_since(console_mark)
                if new_errors:
                    await self.report(current_page, element_name,
                                      f"JavaScript error after clicking: {', '.join(new_errors)}", 'high')

            return True

        except Exception as e:
            await self.report(current_page, element_name, f"Test error: {e}", 'medium')
            return False
