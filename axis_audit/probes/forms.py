"""
Form probes

Submission probe: does clicking submit trigger any monitored request?
Field probe: can a field be filled/selected/checked, and does its value stick?
"""

import logging

from .base import BaseProbe

logger = logging.getLogger(__name__)

SUBMIT_SELECTOR = 'button[type="submit"], button:has-text("Submit")'
VALIDATION_SELECTOR = '[role="alert"], .error, [class*="error"]'


class FormSubmissionProbe(BaseProbe):
    """Submits a form and checks that it produced network traffic."""

    async def run(self, form_selector: str, form_name: str, current_page: str) -> bool:
        try:
            form = self.page.locator(form_selector)
            if await form.count() == 0:
                await self.report(current_page, form_name, 'Form not found', 'medium')
                return False

            submit_button = form.locator(SUBMIT_SELECTOR)
            if await submit_button.count() == 0:
                await self.report(current_page, form_name, 'Submit control not found', 'high')
                return False

            network_mark = self.monitor.network_count
            await submit_button.first.click()
            await self.settle(self.config.form_settle)

            triggered = self.monitor.network_count - network_mark
            if triggered == 0:
                await self.report(current_page, form_name,
                                  'Form submission did not trigger any network requests', 'medium')
                return False

            logger.info(f"✅ {form_name} submission triggered {triggered} requests")
            return True

        except Exception as e:
            await self.report(current_page, form_name, f"Form test error: {e}", 'medium')
            return False


class FormFieldProbe(BaseProbe):
    """Exercises a single form control. Bugs are tagged with the field name."""

    async def run(self, field_selector: str, field_name: str, test_value: str, current_page: str) -> bool:
        logger.info(f"🔍 Testing field: {field_name}")

        try:
            field = self.page.locator(field_selector)
            if await field.count() == 0:
                await self.report(current_page, field_name, f"Field not found: {field_selector}",
                                  'medium', field_name)
                return False

            first_field = field.first
            if not await first_field.is_visible():
                await self.report(current_page, field_name, f"Field not visible: {field_name}",
                                  'medium', field_name)
                return False

            if not await first_field.is_enabled():
                await self.report(current_page, field_name, f"Field not enabled: {field_name}",
                                  'low', field_name)
                return False

            tag_name = await first_field.evaluate('el => el.tagName')
            field_type = await first_field.get_attribute('type')
            checkable = field_type in ('checkbox', 'radio')
            initial_value = await self._input_value(first_field)

            if tag_name == 'SELECT':
                if await first_field.locator('option').count() > 1:
                    await first_field.select_option(index=1)
                    logger.info(f"✅ Selected option in {field_name}")
            elif tag_name == 'INPUT' and checkable:
                await first_field.check()
                logger.info(f"✅ Checked {field_name}")
            else:
                await first_field.fill(test_value)
                logger.info(f"✅ Filled {field_name} with \"{test_value}\"")

            await self.settle(self.config.field_settle)

            if not checkable and tag_name != 'SELECT':
                new_value = await self._input_value(first_field)
                if new_value == initial_value and test_value != initial_value:
                    await self.report(current_page, field_name,
                                      f"Field value did not change after input: {field_name}",
                                      'medium', field_name)
                    return False

            if await self.page.locator(VALIDATION_SELECTOR).count() > 0:
                logger.info(f"ℹ️ Validation error triggered for {field_name} (this may be expected)")

            return True

        except Exception as e:
            await self.report(current_page, field_name, f"Failed to interact with field: {e}",
                              'medium', field_name)
            return False

    @staticmethod
    async def _input_value(field) -> str:
        try:
            return await field.input_value()
        except Exception:
            return ''
