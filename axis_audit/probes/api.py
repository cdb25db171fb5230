"""
API call analysis over the monitor's response history.
"""

from typing import Dict, Any, Iterable, List

from ..core.browser.events import ApiCall


def endpoint_summary(calls: Iterable[ApiCall]) -> Dict[str, Dict[str, Any]]:
    """Group calls by URL without query string: count, methods, statuses."""
    summary: Dict[str, Dict[str, Any]] = {}
    for call in calls:
        endpoint = call.url.split('?')[0]
        stats = summary.setdefault(endpoint, {'count': 0, 'methods': [], 'statuses': []})
        stats['count'] += 1
        if call.method not in stats['methods']:
            stats['methods'].append(call.method)
        if call.status not in stats['statuses']:
            stats['statuses'].append(call.status)
    return summary


def failed_calls(calls: Iterable[ApiCall], threshold: int = 400) -> List[ApiCall]:
    return [call for call in calls if call.status >= threshold]


def server_errors(calls: Iterable[ApiCall]) -> List[ApiCall]:
    """Calls answered with a 5xx status."""
    return failed_calls(calls, threshold=500)
