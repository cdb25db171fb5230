"""
Shared plumbing for probes.
"""

import logging
from typing import Optional

from playwright.async_api import Page

from ..config.settings import ProbeConfig
from ..core.browser.events import EventMonitor
from ..reporting.aggregator import BugAggregator

logger = logging.getLogger(__name__)


class BaseProbe:
    """
    A narrow check against a live page.

    Probes report what they find through the aggregator and never raise into
    the caller; unexpected errors become medium-severity bugs.
    """

    def __init__(self, page: Page, monitor: EventMonitor, aggregator: BugAggregator,
                 config: Optional[ProbeConfig] = None):
        self.page = page
        self.monitor = monitor
        self.aggregator = aggregator
        self.config = config or ProbeConfig()

    async def settle(self, milliseconds: int) -> None:
        """Fixed wait for the page to react."""
        await self.page.wait_for_timeout(milliseconds)

    async def report(self, page: str, element: str, issue: str, severity: str = 'medium',
                     tag: Optional[str] = None) -> None:
        await self.aggregator.report_bug(page, element, issue, severity, tag)
