"""
Core Audit Components

This package contains the fundamental building blocks for auditing:
- Browser management and passive event monitoring
- Session (authentication) driving
"""

from .browser.manager import BrowserManager
from .browser.events import EventMonitor, ApiCall
from .session.driver import SessionDriver, AuthenticationError

__all__ = [
    'BrowserManager', 'EventMonitor', 'ApiCall',
    'SessionDriver', 'AuthenticationError'
]
