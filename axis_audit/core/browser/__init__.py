"""
Browser Management Module

Handles browser lifecycle and passive event monitoring.
"""

from .manager import BrowserManager, FALLBACK_DEVICES
from .events import EventMonitor, ApiCall

__all__ = ['BrowserManager', 'FALLBACK_DEVICES', 'EventMonitor', 'ApiCall']
