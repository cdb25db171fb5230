"""
Security Probe

Unauthenticated checks: protected routes must bounce to the auth pages,
responses should carry the usual security headers over HTTPS, and neither
page source nor the not-found page may leak credentials or internals.
"""

import logging
import re
from typing import Callable, Iterable, Optional
from urllib.parse import urlparse

from .base import BaseProbe

logger = logging.getLogger(__name__)

TAG = 'security'

AUTH_URL_FRAGMENTS = ('/login', '/auth')
LOCAL_HOSTS = ('localhost', '127.0.0.1', '0.0.0.0')

SECURITY_HEADERS = [
    ('x-content-type-options', 'X-Content-Type-Options'),
    ('x-frame-options', 'X-Frame-Options'),
]

SENSITIVE_PATTERNS = [
    (re.compile(r"password\s*[:=]\s*[\"'][^\"']+[\"']", re.I), 'password literal'),
    (re.compile(r"api[_-]?key\s*[:=]\s*[\"'][^\"']+[\"']", re.I), 'API key'),
    (re.compile(r"secret\s*[:=]\s*[\"'][^\"']+[\"']", re.I), 'secret'),
    (re.compile(r"(postgres|mongodb|mysql)://", re.I), 'database connection string'),
]

# Stack traces and server paths on error pages.
INTERNAL_PATTERNS = [
    (re.compile(r"Traceback \(most recent call last\)"), 'Python traceback'),
    (re.compile(r"\bat \S+ \([^)]*:\d+:\d+\)"), 'JavaScript stack trace'),
    (re.compile(r"node_modules/"), 'server file path'),
]


class SecurityProbe(BaseProbe):
    """Run on a fresh, unauthenticated context before logging in."""

    async def check_route_protected(self, url: str, path: str) -> bool:
        """A protected route must redirect to login, auth or the landing page."""
        try:
            await self.page.context.clear_cookies()
            await self.page.goto(url)
            await self.settle(self.config.navigation_settle)

            landed = self.page.url
            if any(fragment in landed for fragment in AUTH_URL_FRAGMENTS):
                return True
            if urlparse(landed).path.rstrip('/') == '':
                return True

            await self.report(path, 'Route Protection',
                              f"Protected route accessible without authentication (landed on {landed})",
                              'high', TAG)
            return False

        except Exception as e:
            await self.report(path, 'Route Protection', f"Route protection check error: {e}", 'medium', TAG)
            return False

    async def check_headers(self, url: str, path: str) -> int:
        """Report plain HTTP and missing CSP/security headers on the document response."""
        issues = 0
        try:
            response = await self.page.goto(url)
        except Exception as e:
            await self.report(path, 'Security Headers', f"Header check error: {e}", 'medium', TAG)
            return 1

        parsed = urlparse(url)
        if parsed.scheme == 'http' and parsed.hostname not in LOCAL_HOSTS:
            await self.report(path, 'Transport', 'Page served over plain HTTP', 'medium', TAG)
            issues += 1

        if response is None:
            logger.info(f"ℹ️ No document response for {url}, skipping header checks")
            return issues

        headers = {name.lower(): value for name, value in response.headers.items()}

        csp = headers.get('content-security-policy') or headers.get('content-security-policy-report-only')
        if not csp:
            await self.report(path, 'Content-Security-Policy', 'Missing Content-Security-Policy header',
                              'medium', TAG)
            issues += 1
        elif not re.search(r"default-src|script-src", csp):
            await self.report(path, 'Content-Security-Policy',
                              'Content-Security-Policy does not restrict script sources', 'medium', TAG)
            issues += 1

        for header, label in SECURITY_HEADERS:
            if header not in headers:
                await self.report(path, label, f"Missing {label} header", 'medium', TAG)
                issues += 1

        if parsed.scheme == 'https' and 'strict-transport-security' not in headers:
            await self.report(path, 'Strict-Transport-Security',
                              'Missing Strict-Transport-Security header', 'medium', TAG)
            issues += 1

        return issues

    async def check_page_source(self, path: str, element: str = 'Page Source',
                                patterns: Optional[Iterable] = None) -> int:
        """Report credentials or internals visible in the current page's HTML."""
        patterns = SENSITIVE_PATTERNS if patterns is None else patterns
        try:
            content = await self.page.content()
        except Exception as e:
            await self.report(path, element, f"Page source check error: {e}", 'medium', TAG)
            return 1

        leaks = [label for pattern, label in patterns if pattern.search(content)]
        for label in leaks:
            await self.report(path, element, f"Sensitive data exposed in page source: {label}", 'high', TAG)
        return len(leaks)

    async def check_not_found_page(self, url: str, path: str) -> int:
        """The 404 page must not leak stack traces, paths or credentials."""
        try:
            await self.page.goto(url)
        except Exception as e:
            await self.report(path, 'Not Found Page', f"Not-found page check error: {e}", 'medium', TAG)
            return 1
        return await self.check_page_source(path, 'Not Found Page', SENSITIVE_PATTERNS + INTERNAL_PATTERNS)

    async def run(self, url_for: Callable[[str], str], protected_routes: Optional[Iterable[str]] = None) -> int:
        """
        All unauthenticated checks.

        Args:
            url_for: Maps a route to an absolute URL
            protected_routes: Routes that require a session (defaults to config)

        Returns:
            Number of issues reported
        """
        routes = self.config.protected_routes if protected_routes is None else protected_routes
        issues = 0
        for path in routes:
            if not await self.check_route_protected(url_for(path), path):
                issues += 1

        issues += await self.check_headers(url_for('/'), '/')
        issues += await self.check_page_source('/')
        issues += await self.check_not_found_page(url_for(self.config.not_found_path), self.config.not_found_path)

        logger.info(f"🔒 Security checks: {issues} issues")
        return issues
