"""
Tests for the auditor facade and the phased full audit.
"""

import pytest

from axis_audit.auditor import Auditor
from axis_audit.config.plan import PagePlan
from axis_audit.config.settings import AuditConfig, ComponentSelectors
from axis_audit.core.session.driver import EMAIL_SELECTOR
from axis_audit.probes.progressive import ImplementationKind
from axis_audit.reporting.models import Severity
from axis_audit.runner import run_full_audit

from tests.conftest import BASE_URL
from tests.fakes import FakePage, FakeElement


def fire(url, status):
    return lambda page: page.fire_request(url, status=status, method='POST')


class TestAuditor:

    @pytest.mark.asyncio
    async def test_login_skipped_without_credentials(self, audit_config):
        page = FakePage()
        auditor = Auditor(page, audit_config)

        assert await auditor.login() is False
        assert page.history == ['about:blank']
        assert auditor.get_report().total_bugs == 0

    @pytest.mark.asyncio
    async def test_navigation_failure_is_critical(self, audit_config):
        page = FakePage()

        async def unreachable(url, **kwargs):
            raise RuntimeError('net::ERR_CONNECTION_REFUSED')
        page.goto = unreachable

        auditor = Auditor(page, audit_config, agent='smoke')

        assert await auditor.visit('/dashboard', 'Dashboard') is False
        bug, = auditor.get_report().bugs
        assert bug.severity is Severity.CRITICAL
        assert bug.agent == 'smoke'
        assert 'ERR_CONNECTION_REFUSED' in bug.issue

    @pytest.mark.asyncio
    async def test_close_detaches_monitor(self, audit_config):
        page = FakePage()
        auditor = Auditor(page, audit_config)

        auditor.close()
        page.fire_request(f"{BASE_URL}/api/x", status=500)

        assert auditor.api_server_errors() == []


class TestFullAudit:

    @pytest.mark.asyncio
    async def test_server_error_fails_gate(self, audit_config):
        page = FakePage()
        page.add('button', FakeElement('BUTTON', 'Sync', on_click=fire(f"{BASE_URL}/api/sync?x=1", 502)))
        plan = [PagePlan('/dashboard', 'Dashboard', interactive=[('button', 'Buttons')])]

        result = await run_full_audit(page, audit_config, plan, security=False)

        assert result.report.total_bugs == 0
        assert not result.passed
        assert [call.status for call in result.server_errors] == [502]
        assert result.api_summary == {f"{BASE_URL}/api/sync": {'count': 1, 'methods': ['POST'], 'statuses': [502]}}
        assert result.report.agent == 'comprehensive'

    @pytest.mark.asyncio
    async def test_clean_run_passes(self, audit_config):
        page = FakePage()
        page.add('.glass.stats', FakeElement('DIV', 'Total Check-ins 3'))
        audit_config.probes.component_selectors['Stats'] = ComponentSelectors('.glass.stats', '.chart')
        plan = [PagePlan('/analytics', 'Analytics', components=['Stats'])]

        result = await run_full_audit(page, audit_config, plan, device='iPhone 12', security=False)

        assert result.passed
        assert result.device == 'iPhone 12'
        assert result.report.agent == 'comprehensive-iPhone 12'
        outcome, = result.components
        assert outcome.kind is ImplementationKind.STATIC

    @pytest.mark.asyncio
    async def test_failed_login_is_critical(self, tmp_path):
        config = AuditConfig(base_url=BASE_URL, screenshot_dir=str(tmp_path),
                             email='qa@example.com', password='pw')
        page = FakePage()
        page.add(EMAIL_SELECTOR, FakeElement('INPUT'))

        result = await run_full_audit(page, config, plan=[], security=False)

        assert not result.passed
        assert result.report.critical == 2


class TestAuditResilience:

    @pytest.mark.asyncio
    async def test_failed_return_navigation_is_reported(self, audit_config):
        page = FakePage()
        dashboard = f"{BASE_URL}/dashboard"

        def leave_and_drop_connection(p):
            p.navigate(f"{BASE_URL}/elsewhere")
            p.unreachable.add(dashboard)

        link = FakeElement('A', 'Docs', on_click=leave_and_drop_connection)
        button = FakeElement('BUTTON', 'Sync')
        page.add('a', link)
        page.add('b', button)
        plan = [PagePlan('/dashboard', 'Dashboard', interactive=[('a', 'Links'), ('b', 'Buttons')])]

        result = await run_full_audit(page, audit_config, plan, security=False)

        assert link.clicks == 1
        assert button.clicks == 0
        first = result.report.bugs[0]
        assert first.severity is Severity.CRITICAL
        assert first.issue.startswith('Navigation failed: net::ERR_CONNECTION_RESET')
        assert not result.passed

    @pytest.mark.asyncio
    async def test_unreachable_form_page_is_reported(self, audit_config):
        page = FakePage()
        page.unreachable.add(f"{BASE_URL}/settings")
        plan = [PagePlan('/settings', 'Settings', forms=[('form', 'Settings Form')])]

        result = await run_full_audit(page, audit_config, plan, security=False)

        # route visit, history visit and form visit
        assert result.report.critical == 3
        assert all(bug.page == '/settings' for bug in result.report.bugs if bug.severity is Severity.CRITICAL)

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_earlier_bugs(self, audit_config, monkeypatch):
        async def explode(self, current_page, touch=True):
            raise RuntimeError('Target page, context or browser has been closed')
        monkeypatch.setattr(Auditor, 'audit_accessibility', explode)

        page = FakePage()
        plan = [PagePlan('/analytics', 'Analytics', components=['Heatmap'])]

        result = await run_full_audit(page, audit_config, plan, security=False)

        missing, aborted = result.report.bugs
        assert missing.tag == 'missing'
        assert aborted.element == 'Audit Run'
        assert aborted.severity is Severity.CRITICAL
        assert aborted.page == '/analytics'
        assert not result.passed

    @pytest.mark.asyncio
    async def test_security_runs_before_login(self, tmp_path):
        config = AuditConfig(base_url=BASE_URL, screenshot_dir=str(tmp_path),
                             email='qa@example.com', password='pw')
        config.probes.protected_routes = ['/dashboard']
        page = FakePage()

        result = await run_full_audit(page, config, plan=[])

        first = result.report.bugs[0]
        assert first.tag == 'security'
        assert first.severity is Severity.HIGH
        assert first.page == '/dashboard'
        assert page.context.cookie_clears == 1
        assert result.report.bugs[-1].page == '/auth/login'
