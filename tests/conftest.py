import pytest

from axis_audit.config.settings import AuditConfig, MonitorConfig, ProbeConfig
from axis_audit.core.browser.events import EventMonitor
from axis_audit.reporting.aggregator import BugAggregator

from tests.fakes import FakePage

BASE_URL = 'http://app.test'


@pytest.fixture
def page():
    return FakePage(f"{BASE_URL}/")


@pytest.fixture
def monitor(page):
    monitor = EventMonitor(MonitorConfig())
    monitor.attach(page)
    return monitor


@pytest.fixture
def aggregator(page, monitor, tmp_path):
    return BugAggregator(page, monitor, str(tmp_path / 'shots'), agent='unit')


@pytest.fixture
def probe_config():
    return ProbeConfig()


@pytest.fixture
def probe_args(page, monitor, aggregator, probe_config):
    return (page, monitor, aggregator, probe_config)


@pytest.fixture
def audit_config(tmp_path):
    return AuditConfig(base_url=BASE_URL, screenshot_dir=str(tmp_path / 'shots'))
