"""
Tests for the unauthenticated security checks.
"""

import pytest

from axis_audit.probes.security import SecurityProbe
from axis_audit.reporting.models import Severity

from tests.fakes import FakeResponse

HARDENED_HEADERS = {
    'Content-Security-Policy': "default-src 'self'; script-src 'self'",
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'Strict-Transport-Security': 'max-age=63072000',
}


def url_for(path):
    return 'https://app.test' + ('' if path == '/' else path)


class TestRouteProtection:

    @pytest.mark.asyncio
    async def test_redirect_to_login_passes(self, page, probe_args, aggregator):
        page.redirects['https://app.test/dashboard'] = 'https://app.test/auth/login?next=/dashboard'

        assert await SecurityProbe(*probe_args).check_route_protected('https://app.test/dashboard', '/dashboard')
        assert aggregator.bugs == []
        assert page.context.cookie_clears == 1

    @pytest.mark.asyncio
    async def test_redirect_to_landing_passes(self, page, probe_args, aggregator):
        page.redirects['https://app.test/settings'] = 'https://app.test/'

        assert await SecurityProbe(*probe_args).check_route_protected('https://app.test/settings', '/settings')

    @pytest.mark.asyncio
    async def test_unprotected_route_is_high(self, page, probe_args, aggregator):
        assert not await SecurityProbe(*probe_args).check_route_protected('https://app.test/profile', '/profile')

        bug, = aggregator.bugs
        assert bug.severity is Severity.HIGH
        assert bug.tag == 'security'
        assert bug.issue == ('Protected route accessible without authentication '
                             '(landed on https://app.test/profile)')


class TestHeaders:

    @pytest.mark.asyncio
    async def test_hardened_response_passes(self, page, probe_args, aggregator):
        page.responses['https://app.test'] = FakeResponse('https://app.test', headers=HARDENED_HEADERS)

        assert await SecurityProbe(*probe_args).check_headers('https://app.test', '/') == 0
        assert aggregator.bugs == []

    @pytest.mark.asyncio
    async def test_missing_headers_are_medium(self, page, probe_args, aggregator):
        page.responses['https://app.test'] = FakeResponse('https://app.test', headers={'x-frame-options': 'DENY'})

        assert await SecurityProbe(*probe_args).check_headers('https://app.test', '/') == 3

        assert [bug.element for bug in aggregator.bugs] == [
            'Content-Security-Policy', 'X-Content-Type-Options', 'Strict-Transport-Security'
        ]
        assert all(bug.severity is Severity.MEDIUM for bug in aggregator.bugs)

    @pytest.mark.asyncio
    async def test_weak_csp(self, page, probe_args, aggregator):
        headers = dict(HARDENED_HEADERS, **{'Content-Security-Policy': "frame-ancestors 'none'"})
        page.responses['https://app.test'] = FakeResponse('https://app.test', headers=headers)

        await SecurityProbe(*probe_args).check_headers('https://app.test', '/')

        bug, = aggregator.bugs
        assert bug.issue == 'Content-Security-Policy does not restrict script sources'

    @pytest.mark.asyncio
    async def test_plain_http_outside_localhost(self, probe_args, aggregator):
        probe = SecurityProbe(*probe_args)

        await probe.check_headers('http://localhost:6789', '/')
        assert aggregator.bugs == []

        await probe.check_headers('http://app.test', '/')
        bug, = aggregator.bugs
        assert bug.issue == 'Page served over plain HTTP'


class TestLeaks:

    @pytest.mark.asyncio
    async def test_credentials_in_source_are_high(self, page, probe_args, aggregator):
        page.html = '<script>const config = { apiKey: "sk-live-123", db: "postgres://u:p@db/app" }</script>'

        assert await SecurityProbe(*probe_args).check_page_source('/') == 2

        issues = sorted(bug.issue for bug in aggregator.bugs)
        assert issues == [
            'Sensitive data exposed in page source: API key',
            'Sensitive data exposed in page source: database connection string',
        ]
        assert all(bug.severity is Severity.HIGH for bug in aggregator.bugs)

    @pytest.mark.asyncio
    async def test_not_found_page_stack_trace(self, page, probe_args, aggregator):
        page.html = ('<h1>404</h1><pre>Error: missing\n'
                     '    at render (/srv/app/node_modules/next/dist/server.js:12:7)</pre>')

        assert await SecurityProbe(*probe_args).check_not_found_page('https://app.test/nope', '/nope') == 2

        assert {bug.element for bug in aggregator.bugs} == {'Not Found Page'}
        assert page.url == 'https://app.test/nope'

    @pytest.mark.asyncio
    async def test_clean_app_passes_full_run(self, page, probe_args, aggregator):
        for path in ('/dashboard', '/settings', '/profile'):
            page.redirects[url_for(path)] = 'https://app.test/auth/login'
        page.responses['https://app.test'] = FakeResponse('https://app.test', headers=HARDENED_HEADERS)
        page.html = '<h1>Welcome</h1>'

        assert await SecurityProbe(*probe_args).run(url_for) == 0
        assert aggregator.bugs == []
        assert page.context.cookie_clears == 3
