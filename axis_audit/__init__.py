"""
AXIS Audit: Browser-driven bug sweeps for deployed web applications

Key Components:
- Core: Browser management, passive event monitoring, authentication
- Probes: Interaction, form, progressive-enhancement, navigation,
  accessibility, performance and security checks
- Reporting: Immutable bug records, aggregation and report output
- Config: Centralized configuration management
"""

from .config import AuditConfig, load_config
from .core import BrowserManager, EventMonitor, SessionDriver, AuthenticationError
from .reporting import Severity, BugRecord, RunReport, BugAggregator, ReportEmitter
from .auditor import Auditor
from .runner import AuditResult, run_full_audit

__version__ = "1.0.0"

__all__ = [
    # Config
    'AuditConfig', 'load_config',

    # Core
    'BrowserManager', 'EventMonitor', 'SessionDriver', 'AuthenticationError',

    # Reporting
    'Severity', 'BugRecord', 'RunReport', 'BugAggregator', 'ReportEmitter',

    # Auditing
    'Auditor', 'AuditResult', 'run_full_audit'
]
