"""
Reporting Module

Bug records, aggregation and report output.
"""

from .models import Severity, BugRecord, RunReport
from .aggregator import BugAggregator
from .emitter import ReportEmitter

__all__ = ['Severity', 'BugRecord', 'RunReport', 'BugAggregator', 'ReportEmitter']
