"""
Full-application audit

Runs the phased audit plan against one page: unauthenticated security
checks, authentication, per-route interactive probes, history navigation,
form submissions, analytics components, accessibility and performance,
then the API gate.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from playwright.async_api import Page

from .auditor import Auditor
from .config.plan import PagePlan, DEFAULT_PLAN
from .config.settings import AuditConfig
from .core.browser.events import ApiCall
from .probes.progressive import ProbeOutcome
from .reporting.models import RunReport

logger = logging.getLogger(__name__)


@dataclass
class AuditResult:
    """Everything one audit run produced."""
    report: RunReport
    api_summary: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    server_errors: List[ApiCall] = field(default_factory=list)
    components: List[ProbeOutcome] = field(default_factory=list)
    device: Optional[str] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        """Hard gates: the run finished, no critical bugs and no 5xx API responses."""
        return self.error is None and self.report.critical == 0 and not self.server_errors


async def run_full_audit(page: Page, config: AuditConfig, plan: Optional[List[PagePlan]] = None,
                         login: bool = True, device: Optional[str] = None,
                         security: bool = True) -> AuditResult:
    """
    Run every audit phase against ``page``.

    Navigation failures become critical bugs and skip the affected step;
    anything else that escapes a phase is recorded as a critical bug and
    ends the run, keeping everything collected so far.

    Args:
        page: Fresh Playwright page
        config: Audit configuration
        plan: Routes to audit (defaults to DEFAULT_PLAN)
        login: Authenticate before probing
        device: Device name, recorded in the result only
        security: Run the unauthenticated security checks first

    Returns:
        AuditResult with the run report and API analysis
    """
    plan = plan if plan is not None else DEFAULT_PLAN
    auditor = Auditor(page, config, agent=f"{config.agent}-{device}" if device else None)
    components: List[ProbeOutcome] = []
    current_path = '/'

    logger.info(f"🚀 Starting audit of {config.base_url}" + (f" on {device}" if device else ""))

    try:
        if security:
            logger.info("📝 PHASE 0: Security (unauthenticated)")
            await auditor.audit_security()

        logger.info("📝 PHASE 1: Authentication")
        if login:
            await auditor.login()

        for number, page_plan in enumerate(plan, start=2):
            logger.info(f"📝 PHASE {number}: {page_plan.name}")
            current_path = page_plan.path
            if not await auditor.visit(page_plan.path, page_plan.name):
                continue

            for component in page_plan.components:
                components.append(await auditor.test_component(component, page_plan.path))

            await auditor.audit_accessibility(page_plan.path, touch=device is not None)

            for selector, name in page_plan.interactive:
                # Clicks may navigate away; return before each group.
                if page.url.rstrip('/') != config.url(page_plan.path).rstrip('/'):
                    if not await auditor.goto(page_plan.path):
                        break
                await auditor.test_interactive_element(selector, name, page_plan.path)

        logger.info("📝 PHASE: Navigation history")
        for page_plan in plan:
            current_path = page_plan.path
            if await auditor.visit(page_plan.path, page_plan.name):
                await auditor.navigation.round_trip(page_plan.name)

        logger.info("📝 PHASE: Forms")
        for page_plan in plan:
            current_path = page_plan.path
            for selector, name in page_plan.forms:
                if await auditor.goto(page_plan.path):
                    await auditor.audit_form_submission(selector, name, page_plan.path)

        logger.info("📝 PHASE: Performance")
        for page_plan in plan[:2]:
            current_path = page_plan.path
            await auditor.audit_performance(page_plan.path, page_plan.name)

    except Exception as e:
        logger.error(f"❌ Audit aborted on {current_path}: {e}")
        await auditor.report_bug(current_path, 'Audit Run', f"Audit aborted: {e}", 'critical')

    finally:
        auditor.close()

    errors = auditor.api_server_errors()
    for call in errors:
        logger.error(f"🚨 API server error: {call.method} {call.url} - Status: {call.status}")

    return AuditResult(
        report=auditor.get_report(),
        api_summary=auditor.api_summary(),
        server_errors=errors,
        components=components,
        device=device
    )
