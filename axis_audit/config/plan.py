"""
Audit Plan

Phased page plan for the full-application audit: which routes to visit,
which controls to click on each, which forms to submit and which
analytics components to check for progressive enhancement.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class PagePlan:
    """One route and the interactive selectors to probe on it."""
    path: str
    name: str
    interactive: List[Tuple[str, str]] = field(default_factory=list)
    forms: List[Tuple[str, str]] = field(default_factory=list)
    components: List[str] = field(default_factory=list)


DEFAULT_PLAN: List[PagePlan] = [
    PagePlan('/', 'Landing Page', interactive=[
        ('button', 'Buttons'),
        ('a[href]', 'Links'),
        ('[role="button"]', 'Button Roles'),
        ('svg circle', 'SVG Circles'),
    ]),
    PagePlan('/dashboard', 'Dashboard', interactive=[
        ('svg circle', 'Hexagon Circles'),
        ('[data-testid^="category-card"]', 'Category Cards'),
        ('button:has-text("Check In")', 'Check In Buttons'),
        ('button:has-text("Complete")', 'Complete Buttons'),
    ]),
    PagePlan('/my-day', 'My Day', interactive=[
        ('button:has-text("Add")', 'Add Buttons'),
        ('button:has-text("Edit")', 'Edit Buttons'),
        ('select', 'Select Elements'),
        ('input[type="time"]', 'Time Inputs'),
    ]),
    PagePlan('/profile', 'Profile', interactive=[
        ('input[type="text"]', 'Text Inputs'),
        ('textarea', 'Textarea Elements'),
        ('button:has-text("Save")', 'Save Buttons'),
    ], forms=[
        ('form', 'Profile Form'),
    ]),
    PagePlan('/settings', 'Settings', interactive=[
        ('input[type="checkbox"]', 'Checkboxes'),
        ('select', 'Select Dropdowns'),
        ('[role="switch"]', 'Switch Controls'),
    ], forms=[
        ('form', 'Settings Form'),
    ]),
    PagePlan('/analytics', 'Analytics', interactive=[
        ('button:has-text("Filter")', 'Filter Buttons'),
        ('button:has-text("Export")', 'Export Buttons'),
    ], components=[
        'Overview Stats',
        'Category Performance',
        'Streak Analysis',
        'Performance Trends',
    ]),
    PagePlan('/achievements', 'Achievements', interactive=[
        ('[data-testid^="achievement-"]', 'Achievement Items'),
        ('button:has-text("View")', 'View Buttons'),
    ]),
]
