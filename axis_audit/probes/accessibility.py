"""
Accessibility Probe

Low-severity checks drawn from the WCAG 2.1 AA suites: form controls with
no accessible name, images without alt text, and touch targets smaller
than the minimum size.
"""

import logging
from typing import Optional

from .base import BaseProbe

logger = logging.getLogger(__name__)

TAG = 'accessibility'
FORM_CONTROLS = 'input:not([type="hidden"]):not([type="submit"]), select, textarea'
TOUCH_TARGETS = 'button, a[href], [role="button"]'


class AccessibilityProbe(BaseProbe):

    async def check_labels(self, current_page: str, selector: str = FORM_CONTROLS) -> int:
        """Report controls with no label, aria-label or aria-labelledby."""
        missing = 0
        try:
            controls = self.page.locator(selector)
            for i in range(await controls.count()):
                control = controls.nth(i)
                if not await control.is_visible():
                    continue
                if await self._has_accessible_name(control):
                    continue

                name = await control.get_attribute('name') or await control.get_attribute('id') or f"#{i + 1}"
                await self.report(current_page, f"Form Control {name}",
                                  'Missing label association', 'low', TAG)
                missing += 1
        except Exception as e:
            await self.report(current_page, 'Form Labels', f"Label check error: {e}", 'medium', TAG)
        return missing

    async def _has_accessible_name(self, control) -> bool:
        if await control.get_attribute('aria-label') or await control.get_attribute('aria-labelledby'):
            return True

        control_id: Optional[str] = await control.get_attribute('id')
        if control_id and await self.page.locator(f'label[for="{control_id}"]').count() > 0:
            return True

        return bool(await control.evaluate('el => !!el.closest("label")'))

    async def check_images(self, current_page: str, selector: str = 'img') -> int:
        """Report images with no alt attribute at all (empty alt is decorative)."""
        missing = 0
        try:
            images = self.page.locator(selector)
            for i in range(await images.count()):
                image = images.nth(i)
                if await image.get_attribute('alt') is None:
                    src = await image.get_attribute('src') or f"#{i + 1}"
                    await self.report(current_page, f"Image {src}", 'Image missing alt text', 'low', TAG)
                    missing += 1
        except Exception as e:
            await self.report(current_page, 'Images', f"Alt text check error: {e}", 'medium', TAG)
        return missing

    async def check_touch_targets(self, current_page: str, selector: str = TOUCH_TARGETS,
                                  min_size: Optional[int] = None) -> int:
        """Report visible targets smaller than ``min_size`` CSS px on either axis."""
        min_size = min_size or self.config.min_touch_target
        small = 0
        try:
            targets = self.page.locator(selector)
            for i in range(await targets.count()):
                target = targets.nth(i)
                if not await target.is_visible():
                    continue

                box = await target.bounding_box()
                if not box:
                    continue
                if box['width'] < min_size or box['height'] < min_size:
                    label = (await target.text_content() or '').strip()[:30] or f"#{i + 1}"
                    await self.report(current_page, f"Touch Target {label}",
                                      f"Touch target too small ({box['width']:.0f}x{box['height']:.0f}px, "
                                      f"minimum {min_size}x{min_size})", 'low', TAG)
                    small += 1
        except Exception as e:
            await self.report(current_page, 'Touch Targets', f"Touch target check error: {e}", 'medium', TAG)
        return small

    async def run(self, current_page: str, touch: bool = True) -> int:
        """All checks; returns the number of issues found."""
        issues = await self.check_labels(current_page)
        issues += await self.check_images(current_page)
        if touch:
            issues += await self.check_touch_targets(current_page)
        logger.info(f"♿ Accessibility check on {current_page}: {issues} issues")
        return issues
