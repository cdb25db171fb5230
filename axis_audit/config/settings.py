"""
Audit Configuration

Configuration classes for event monitoring, probes, browser setup and
environment-specific settings, plus the YAML/env loader.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "axis_audit.yml"


@dataclass
class MonitorConfig:
    """Configuration for passive network/console monitoring."""
    monitored_url_substrings: List[str] = None
    error_status_threshold: int = 400
    max_log_entries: int = 500

    def __post_init__(self):
        if self.monitored_url_substrings is None:
            self.monitored_url_substrings = ['/api/', 'supabase.co']


@dataclass
class ComponentSelectors:
    """Static ("current") and chart ("future") selectors for one component."""
    current: str
    future: str


@dataclass
class ProbeConfig:
    """Settle intervals (milliseconds) and selector maps used by probes."""
    click_settle: int = 1000
    form_settle: int = 3000
    field_settle: int = 500
    hover_settle: int = 500
    navigation_settle: int = 2000
    loading_settle: int = 5000
    history_settle: int = 1000
    min_touch_target: int = 44

    loading_selector: str = '[data-loading="true"], .loading, [class*="spinner"]'
    tooltip_selector: str = '[role="tooltip"], .tooltip, [data-testid*="tooltip"]'
    data_element_selector: str = '.text-2xl, .font-bold, [class*="text-"][class*="font-"]'

    component_selectors: Dict[str, ComponentSelectors] = None
    planned_components: List[str] = None
    protected_routes: List[str] = None
    not_found_path: str = '/this-route-does-not-exist'

    def __post_init__(self):
        if self.component_selectors is None:
            self.component_selectors = {
                'Category Performance': ComponentSelectors(
                    current='.glass:has-text("Category Performance")',
                    future='[data-testid="category-chart"], .recharts-wrapper'
                ),
                'Streak Analysis': ComponentSelectors(
                    current='.glass:has-text("Current Streaks")',
                    future='[data-testid="streak-chart"], .streak-visualization'
                ),
                'Performance Trends': ComponentSelectors(
                    current='.glass:has-text("Best Performance"), .glass:has-text("Areas for Improvement")',
                    future='[data-testid="performance-chart"], .performance-trends'
                ),
                'Overview Stats': ComponentSelectors(
                    current='.glass:has-text("Total Check-ins"), .glass:has-text("Active Days")',
                    future='[data-testid="overview-chart"], .overview-visualization'
                ),
            }
        else:
            self.component_selectors = {
                name: value if isinstance(value, ComponentSelectors) else ComponentSelectors(**value)
                for name, value in self.component_selectors.items()
            }
        if self.planned_components is None:
            self.planned_components = []
        if self.protected_routes is None:
            self.protected_routes = ['/dashboard', '/settings', '/profile']


@dataclass
class PerformanceBudget:
    """Page-load budgets in milliseconds."""
    load_time: int = 3000
    dom_content_loaded: int = 2000
    first_contentful_paint: int = 1800


@dataclass
class BrowserConfig:
    """Configuration for browser setup."""
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 720
    timeout: int = 30000
    devices: List[str] = None
    args: List[str] = None

    def __post_init__(self):
        if self.args is None:
            self.args = ['--no-sandbox', '--disable-dev-shm-usage']
        if self.devices is None:
            self.devices = []


@dataclass
class AuditConfig:
    """Main audit configuration."""
    base_url: str = 'http://localhost:6789'
    screenshot_dir: str = 'test-results'
    agent: str = 'comprehensive'
    email: Optional[str] = None
    password: Optional[str] = None
    json_output: Optional[str] = None

    monitor: MonitorConfig = None
    probes: ProbeConfig = None
    budget: PerformanceBudget = None
    browser: BrowserConfig = None

    def __post_init__(self):
        self.base_url = self.base_url.rstrip('/')
        if self.monitor is None:
            self.monitor = MonitorConfig()
        if self.probes is None:
            self.probes = ProbeConfig()
        if self.budget is None:
            self.budget = PerformanceBudget()
        if self.browser is None:
            self.browser = BrowserConfig()

    def url(self, path: str = '') -> str:
        """Absolute URL for a route under test."""
        if not path or path == '/':
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuditConfig':
        """Build a config from a parsed YAML mapping."""
        data = dict(data or {})
        sections = {
            'monitor': MonitorConfig,
            'probes': ProbeConfig,
            'budget': PerformanceBudget,
            'browser': BrowserConfig,
        }
        for key, section_cls in sections.items():
            if key in data and data[key] is not None:
                data[key] = section_cls(**data[key])

        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def apply_env_overrides(config: AuditConfig) -> AuditConfig:
    """Overlay AXIS_AUDIT_* environment variables onto a config."""
    base_url = os.getenv('AXIS_AUDIT_BASE_URL') or os.getenv('PLAYWRIGHT_BASE_URL')
    if base_url:
        config.base_url = base_url.rstrip('/')

    config.email = os.getenv('AXIS_AUDIT_EMAIL', config.email)
    config.password = os.getenv('AXIS_AUDIT_PASSWORD', config.password)
    config.screenshot_dir = os.getenv('AXIS_AUDIT_SCREENSHOT_DIR', config.screenshot_dir)

    headless = os.getenv('AXIS_AUDIT_HEADLESS')
    if headless is not None:
        config.browser.headless = _env_flag(headless)

    return config


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AuditConfig:
    """
    Load audit configuration.

    Reads the YAML file when present, falls back to defaults otherwise,
    then applies environment overrides.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Fully populated AuditConfig
    """
    try:
        with open(config_path, 'r') as file:
            data = yaml.safe_load(file) or {}
        logger.info(f"Loaded configuration from {config_path}")
    except FileNotFoundError:
        logger.warning(f"No {config_path} found, using defaults")
        data = {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {config_path}: {e}")
        raise

    return apply_env_overrides(AuditConfig.from_dict(data))
