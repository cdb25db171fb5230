"""
Performance budget probe.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..config.settings import PerformanceBudget
from .base import BaseProbe

logger = logging.getLogger(__name__)

TAG = 'performance'

TIMING_SCRIPT = """() => {
    const nav = performance.getEntriesByType('navigation')[0];
    const fcp = performance.getEntriesByName('first-contentful-paint')[0];
    return {
        domContentLoaded: nav ? nav.domContentLoadedEventEnd - nav.startTime : null,
        loadComplete: nav ? nav.loadEventEnd - nav.startTime : null,
        firstContentfulPaint: fcp ? fcp.startTime : null
    };
}"""


@dataclass
class PageTiming:
    """Milliseconds; None where the browser didn't report a value."""
    url: str
    load_time: float
    dom_content_loaded: Optional[float] = None
    first_contentful_paint: Optional[float] = None


class PerformanceProbe(BaseProbe):

    def __init__(self, *args, budget: Optional[PerformanceBudget] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.budget = budget or PerformanceBudget()

    async def measure(self, url: str) -> PageTiming:
        start = time.monotonic()
        await self.page.goto(url)
        await self.page.wait_for_load_state('load')
        load_time = (time.monotonic() - start) * 1000

        metrics = await self.page.evaluate(TIMING_SCRIPT) or {}
        return PageTiming(
            url=url,
            load_time=load_time,
            dom_content_loaded=metrics.get('domContentLoaded'),
            first_contentful_paint=metrics.get('firstContentfulPaint')
        )

    async def run(self, url: str, page_name: str) -> Optional[PageTiming]:
        """Load ``url`` and report every metric that blows its budget."""
        try:
            timing = await self.measure(url)
        except Exception as e:
            await self.report(page_name, 'Page Load', f"Performance measurement failed: {e}", 'medium', TAG)
            return None

        logger.info(f"⏱️ {page_name}: load {timing.load_time:.0f}ms, "
                    f"DCL {timing.dom_content_loaded}, FCP {timing.first_contentful_paint}")

        checks = [
            ('Load Time', timing.load_time, self.budget.load_time),
            ('DOMContentLoaded', timing.dom_content_loaded, self.budget.dom_content_loaded),
            ('First Contentful Paint', timing.first_contentful_paint, self.budget.first_contentful_paint),
        ]
        for metric, value, budget in checks:
            if value is not None and value > budget:
                await self.report(page_name, metric,
                                  f"{metric} {value:.0f}ms exceeds budget of {budget}ms", 'medium', TAG)

        return timing
