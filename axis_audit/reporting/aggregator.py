"""
Bug Aggregation

Turns an observed defect into an immutable BugRecord: best-effort
screenshot, snapshot of the monitor's logs, then a reset of those logs so
the next probe starts clean.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from playwright.async_api import Page

from ..core.browser.events import EventMonitor
from .models import BugRecord, RunReport, Severity

logger = logging.getLogger(__name__)


class BugAggregator:
    """
    Collects bug records for one audit run.

    Logs on the monitor are interpreted as "since the last probe": every
    report snapshots them and then clears them.
    """

    def __init__(self, page: Optional[Page], monitor: EventMonitor,
                 screenshot_dir: str = 'test-results', agent: Optional[str] = None):
        self.page = page
        self.monitor = monitor
        self.screenshot_dir = Path(screenshot_dir)
        self.agent = agent

        self._bugs: List[BugRecord] = []
        self._counter = 0

    @property
    def bugs(self) -> List[BugRecord]:
        return list(self._bugs)

    async def report_bug(self, page: str, element: str, issue: str,
                         severity: Union[Severity, str] = Severity.MEDIUM,
                         tag: Optional[str] = None) -> BugRecord:
        """
        Record a defect.

        Args:
            page: Route under test
            element: Human-readable element description
            issue: What went wrong
            severity: One of critical/high/medium/low
            tag: Optional classifier (field name, category, implementation state)

        Returns:
            The appended BugRecord
        """
        severity = Severity.parse(severity)
        self._counter += 1

        screenshot = await self._capture_screenshot(self._counter, page)
        network_log, console_errors = self.monitor.snapshot()

        record = BugRecord(
            page=page,
            element=element,
            issue=issue,
            severity=severity,
            timestamp=datetime.now(timezone.utc).isoformat(),
            network_log=network_log,
            console_errors=console_errors,
            screenshot=screenshot,
            tag=tag,
            agent=self.agent
        )
        self._bugs.append(record)

        logger.warning(f"🐛 BUG FOUND [{severity.value.upper()}] on {page}: {issue}")

        self.monitor.clear()
        return record

    async def _capture_screenshot(self, bug_id: int, page_name: str) -> Optional[str]:
        """Full-page screenshot; a failure here must not mask the bug."""
        if self.page is None:
            return None

        filename = f"bug-{bug_id}-{page_name.replace('/', '_')}.png"
        path = self.screenshot_dir / filename
        try:
            await self.page.screenshot(path=str(path), full_page=True)
            logger.info(f"📸 Bug screenshot captured: {filename}")
            return str(path)
        except Exception as e:
            logger.warning(f"⚠️ Could not capture screenshot: {e}")
            return None

    def bugs_by_severity(self, severity: Union[Severity, str]) -> List[BugRecord]:
        severity = Severity.parse(severity)
        return [bug for bug in self._bugs if bug.severity == severity]

    def get_report(self) -> RunReport:
        """Severity counts plus the full bug list. Does not mutate state."""
        return RunReport.from_bugs(self._bugs, agent=self.agent)
