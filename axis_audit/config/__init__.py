"""
Configuration Management

Centralized configuration for all audit components:
- Monitoring and probe configurations
- Browser configurations
- Performance budgets
- Environment-specific settings
"""

from .settings import (
    AuditConfig, MonitorConfig, ProbeConfig, ComponentSelectors,
    PerformanceBudget, BrowserConfig, load_config, apply_env_overrides
)
from .plan import PagePlan, DEFAULT_PLAN

__all__ = [
    'AuditConfig', 'MonitorConfig', 'ProbeConfig', 'ComponentSelectors',
    'PerformanceBudget', 'BrowserConfig', 'load_config', 'apply_env_overrides',
    'PagePlan', 'DEFAULT_PLAN'
]
