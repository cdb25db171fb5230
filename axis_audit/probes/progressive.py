"""
Progressive Enhancement Probe

Checks a component that may exist either as static content or as an
interactive chart, without treating the simpler form as a failure.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.settings import ComponentSelectors
from .base import BaseProbe

logger = logging.getLogger(__name__)


class ImplementationKind(str, Enum):
    CHART = "chart"
    STATIC = "static"
    MISSING = "missing"


@dataclass(frozen=True)
class ProbeOutcome:
    """Which implementation of a component was found, and how many instances."""
    kind: ImplementationKind
    component: str
    count: int = 0
    suppressed: bool = False


class ProgressiveEnhancementProbe(BaseProbe):
    """Chart first, static second, missing last."""

    async def run(self, component: str, current_page: str,
                  selectors: Optional[ComponentSelectors] = None) -> ProbeOutcome:
        logger.info(f"📊 Testing {component} with progressive enhancement...")

        selectors = selectors or self.config.component_selectors.get(component)
        if selectors is None:
            logger.warning(f"⚠️ No selector mapping for {component}")
            return await self._missing(component, current_page)

        try:
            charts = self.page.locator(selectors.future)
            chart_count = await charts.count()
            if chart_count > 0:
                logger.info(f"✅ Chart implementation found for {component}")
                await self._check_charts(charts, chart_count, component, current_page)
                return ProbeOutcome(ImplementationKind.CHART, component, chart_count)

            sections = self.page.locator(selectors.current)
            section_count = await sections.count()
            if section_count > 0:
                logger.info(f"✅ Static implementation found for {component}")
                await self._check_static(sections, section_count, component, current_page)
                return ProbeOutcome(ImplementationKind.STATIC, component, section_count)

        except Exception as e:
            await self.report(current_page, component, f"Progressive check error: {e}", 'medium')

        return await self._missing(component, current_page)

    async def _missing(self, component: str, current_page: str) -> ProbeOutcome:
        if component in self.config.planned_components:
            logger.info(f"ℹ️ [INFO] {component} not implemented yet (planned)")
            return ProbeOutcome(ImplementationKind.MISSING, component, suppressed=True)

        await self.report(current_page, component,
                          'No implementation found (neither static nor chart)',
                          'medium', ImplementationKind.MISSING.value)
        return ProbeOutcome(ImplementationKind.MISSING, component)

    async def _check_charts(self, charts, count: int, component: str, current_page: str) -> None:
        logger.info(f"📈 Testing chart implementation for {component}...")
        tag = ImplementationKind.CHART.value

        for i in range(count):
            chart = charts.nth(i)

            if not await chart.is_visible():
                await self.report(current_page, component, f"Chart {i + 1} not visible", 'medium', tag)
                continue

            if not (await chart.inner_html()).strip():
                await self.report(current_page, component, f"Chart {i + 1} appears to be empty", 'medium', tag)
                continue

            # Tooltips and click handlers are optional; only log what we see.
            try:
                await chart.hover()
                await self.settle(self.config.hover_settle)
                if await self.page.locator(self.config.tooltip_selector).count() > 0:
                    logger.info(f"✅ Chart {i + 1} has interactive tooltips")
                else:
                    logger.info(f"ℹ️ Chart {i + 1} has no tooltips")

                await chart.click()
                await self.settle(self.config.hover_settle)
                logger.info(f"✅ Chart {i + 1} is interactive")
            except Exception as e:
                logger.info(f"ℹ️ Chart {i + 1} interaction limited: {e}")

    async def _check_static(self, sections, count: int, component: str, current_page: str) -> None:
        logger.info(f"📋 Testing static implementation for {component}...")
        tag = ImplementationKind.STATIC.value

        for i in range(count):
            section = sections.nth(i)

            if not await section.is_visible():
                await self.report(current_page, component, f"Static section {i + 1} not visible", 'medium', tag)
                continue

            content = await section.text_content()
            if not content or not content.strip():
                await self.report(current_page, component, f"Static section {i + 1} appears to be empty",
                                  'medium', tag)
                continue

            data_count = await section.locator(self.config.data_element_selector).count()
            if data_count > 0:
                logger.info(f"✅ Found {data_count} data elements in static section")
            else:
                logger.info("ℹ️ Static section has content but no obvious data display elements")
