"""
Browser Event Monitoring

Passive observer for a page's request, response, console and page-error
events. Keeps the network log and console-error log that bug records
snapshot.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from playwright.async_api import Page

from ...config.settings import MonitorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiCall:
    """A monitored HTTP response."""
    url: str
    method: str
    status: int


class EventMonitor:
    """
    Observes a page and maintains two bounded, clearable logs.

    Handlers never raise: a handler failure is logged and dropped so that
    monitoring can't break the page under test.

    ``network_count`` and ``console_count`` are totals of entries ever
    appended; they are unaffected by trimming and clearing, so callers diff
    them to find what happened since a mark.

    ``api_calls`` is not bounded: it holds one small record per monitored
    response and the 5xx gate must see every one of them.
    """

    def __init__(self, config: MonitorConfig = None):
        self.config = config or MonitorConfig()
        self.network_log: List[str] = []
        self.console_errors: List[str] = []
        self.api_calls: List[ApiCall] = []
        self.network_count = 0
        self.console_count = 0

    def attach(self, page: Page) -> None:
        """Subscribe to the page's events."""
        page.on('request', self.on_request)
        page.on('response', self.on_response)
        page.on('console', self.on_console_message)
        page.on('pageerror', self.on_page_error)
        logger.info("Event monitor attached to page")

    def detach(self, page: Page) -> None:
        """Unsubscribe from the page's events."""
        page.remove_listener('request', self.on_request)
        page.remove_listener('response', self.on_response)
        page.remove_listener('console', self.on_console_message)
        page.remove_listener('pageerror', self.on_page_error)

    def matches(self, url: str) -> bool:
        """True if the URL falls under one of the monitored substrings."""
        return any(fragment in url for fragment in self.config.monitored_url_substrings)

    def on_request(self, request) -> None:
        try:
            url = request.url
            if self.matches(url):
                self._record_network(f"{request.method} {url}")
        except Exception as e:
            logger.error(f"Error in request handler: {e}")

    def on_response(self, response) -> None:
        try:
            url = response.url
            if not self.matches(url):
                return

            status = response.status
            self.api_calls.append(ApiCall(url=url, method=response.request.method, status=status))
            if status >= self.config.error_status_threshold:
                self._record_network(f"❌ {status} {url}")
        except Exception as e:
            logger.error(f"Error in response handler: {e}")

    def on_console_message(self, message) -> None:
        try:
            if message.type == 'error':
                self._record_console(f"Console Error: {message.text}")
        except Exception as e:
            logger.error(f"Error in console handler: {e}")

    def on_page_error(self, error) -> None:
        try:
            text = getattr(error, 'message', None) or str(error)
            self._record_console(f"Page Error: {text}")
        except Exception as e:
            logger.error(f"Error in page error handler: {e}")

    def _record_network(self, entry: str) -> None:
        self._append(self.network_log, entry)
        self.network_count += 1

    def _record_console(self, entry: str) -> None:
        self._append(self.console_errors, entry)
        self.console_count += 1

    def _append(self, log: List[str], entry: str) -> None:
        log.append(entry)
        overflow = len(log) - self.config.max_log_entries
        if overflow > 0:
            del log[:overflow]

    @staticmethod
    def _tail(log: List[str], new: int) -> List[str]:
        return list(log[-new:]) if new > 0 else []

    def network_since(self, mark: int) -> List[str]:
        """Network entries appended after ``network_count`` was ``mark``."""
        return self._tail(self.network_log, self.network_count - mark)

    def console_errors_since(self, mark: int) -> List[str]:
        """Console errors appended after ``console_count`` was ``mark``."""
        return self._tail(self.console_errors, self.console_count - mark)

    @property
    def network_errors(self) -> List[str]:
        """Network log entries for failed responses."""
        return [entry for entry in self.network_log if entry.startswith('❌')]

    def snapshot(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        """Independent copies of (network log, console-error log)."""
        return tuple(self.network_log), tuple(self.console_errors)

    def clear(self) -> None:
        """Empty both logs. API call history is kept for the whole run."""
        self.network_log.clear()
        self.console_errors.clear()
