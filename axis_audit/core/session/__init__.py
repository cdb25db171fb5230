"""
Session Management Module

Authentication flows for audited applications.
"""

from .driver import SessionDriver, AuthenticationError

__all__ = ['SessionDriver', 'AuthenticationError']
