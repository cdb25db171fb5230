"""
Probe Functions

Narrow, composable checks against a live page. Each may produce bug
records through the aggregator; none raises into the caller.
"""

from .base import BaseProbe
from .interaction import ElementInteractionProbe
from .forms import FormSubmissionProbe, FormFieldProbe
from .progressive import ProgressiveEnhancementProbe, ProbeOutcome, ImplementationKind
from .navigation import NavigationProbe
from .accessibility import AccessibilityProbe
from .performance import PerformanceProbe, PageTiming
from .security import SecurityProbe
from .api import endpoint_summary, failed_calls, server_errors

__all__ = [
    'BaseProbe', 'ElementInteractionProbe', 'FormSubmissionProbe', 'FormFieldProbe',
    'ProgressiveEnhancementProbe', 'ProbeOutcome', 'ImplementationKind',
    'NavigationProbe', 'AccessibilityProbe', 'PerformanceProbe', 'PageTiming', 'SecurityProbe',
    'endpoint_summary', 'failed_calls', 'server_errors'
]
