"""
Auditor

One parametrized auditor per page: wires an EventMonitor, a BugAggregator
and the probes together behind a single object for test bodies to use.
"""

import logging
from typing import Optional

from playwright.async_api import Page

from .config.settings import AuditConfig, ComponentSelectors
from .core.browser.events import EventMonitor
from .core.session.driver import SessionDriver
from .probes import (
    ElementInteractionProbe, FormSubmissionProbe, FormFieldProbe,
    ProgressiveEnhancementProbe, ProbeOutcome, NavigationProbe,
    AccessibilityProbe, PerformanceProbe, PageTiming, SecurityProbe,
    endpoint_summary, server_errors
)
from .reporting.aggregator import BugAggregator
from .reporting.models import BugRecord, RunReport

logger = logging.getLogger(__name__)


class Auditor:
    """
    Audit facade bound to one page.

    Example:
        auditor = Auditor(page, config)
        await auditor.test_interactive_element('button', 'Buttons', '/')
        assert auditor.get_report().critical == 0
    """

    def __init__(self, page: Page, config: Optional[AuditConfig] = None, agent: Optional[str] = None):
        self.page = page
        self.config = config or AuditConfig()

        self.monitor = EventMonitor(self.config.monitor)
        self.monitor.attach(page)
        self.aggregator = BugAggregator(page, self.monitor, self.config.screenshot_dir,
                                        agent or self.config.agent)
        self.session = SessionDriver(page, self.config.base_url, timeout=self.config.browser.timeout)

        probe_args = (page, self.monitor, self.aggregator, self.config.probes)
        self.interactions = ElementInteractionProbe(*probe_args)
        self.forms = FormSubmissionProbe(*probe_args)
        self.fields = FormFieldProbe(*probe_args)
        self.progressive = ProgressiveEnhancementProbe(*probe_args)
        self.navigation = NavigationProbe(*probe_args)
        self.accessibility = AccessibilityProbe(*probe_args)
        self.performance = PerformanceProbe(*probe_args, budget=self.config.budget)
        self.security = SecurityProbe(*probe_args)

    async def report_bug(self, page: str, element: str, issue: str,
                         severity: str = 'medium', tag: Optional[str] = None) -> BugRecord:
        return await self.aggregator.report_bug(page, element, issue, severity, tag)

    async def login(self) -> bool:
        """Authenticate with the configured credentials, reporting failures."""
        if not self.config.has_credentials:
            logger.warning("⚠️ No credentials configured - skipping login")
            return False
        return await self.session.audit_login_form(self.aggregator, self.config.email, self.config.password)

    async def goto(self, path: str) -> bool:
        """Navigate to a route; a failure becomes a critical bug instead of raising."""
        try:
            await self.page.goto(self.config.url(path))
            return True
        except Exception as e:
            await self.report_bug(path, 'Navigation', f"Navigation failed: {e}", 'critical')
            return False

    async def visit(self, path: str, page_name: str) -> bool:
        """Navigate to a route and check we landed there."""
        if not await self.goto(path):
            return False
        return await self.navigation.check(path, page_name)

    async def test_interactive_element(self, selector: str, element_name: str, current_page: str) -> bool:
        return await self.interactions.run(selector, element_name, current_page)

    async def audit_form_submission(self, form_selector: str, form_name: str, current_page: str) -> bool:
        return await self.forms.run(form_selector, form_name, current_page)

    async def test_form_field(self, selector: str, field_name: str, test_value: str, current_page: str) -> bool:
        return await self.fields.run(selector, field_name, test_value, current_page)

    async def test_component(self, component: str, current_page: str,
                             selectors: Optional[ComponentSelectors] = None) -> ProbeOutcome:
        return await self.progressive.run(component, current_page, selectors)

    async def audit_accessibility(self, current_page: str, touch: bool = True) -> int:
        return await self.accessibility.run(current_page, touch=touch)

    async def audit_performance(self, path: str, page_name: str) -> Optional[PageTiming]:
        return await self.performance.run(self.config.url(path), page_name)

    async def audit_security(self) -> int:
        """Unauthenticated route, header and leak checks; run before login."""
        return await self.security.run(self.config.url)

    def api_summary(self) -> dict:
        return endpoint_summary(self.monitor.api_calls)

    def api_server_errors(self) -> list:
        return server_errors(self.monitor.api_calls)

    def get_report(self) -> RunReport:
        return self.aggregator.get_report()

    def close(self) -> None:
        """Stop listening to the page."""
        self.monitor.detach(self.page)
