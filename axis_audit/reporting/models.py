"""
Bug report data model.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from dataclasses_json import dataclass_json, LetterCase


class Severity(str, Enum):
    """Coarse priority assigned by the probe author."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Union['Severity', str]) -> 'Severity':
        """Coerce a string or Severity, rejecting anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ', '.join(s.value for s in cls)
            raise ValueError(f"Invalid severity {value!r}; expected one of: {allowed}") from None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class BugRecord:
    """One observed defect. Logs are snapshots taken at capture time."""
    page: str
    element: str
    issue: str
    severity: Severity
    timestamp: str
    network_log: Tuple[str, ...] = ()
    console_errors: Tuple[str, ...] = ()
    screenshot: Optional[str] = None
    tag: Optional[str] = None
    agent: Optional[str] = None

    @property
    def network_errors(self) -> Tuple[str, ...]:
        return tuple(entry for entry in self.network_log if entry.startswith('❌'))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class RunReport:
    """Severity counts plus the ordered bug list, derived on demand."""
    agent: Optional[str]
    total_bugs: int
    critical: int
    high: int
    medium: int
    low: int
    bugs: Tuple[BugRecord, ...]

    @classmethod
    def from_bugs(cls, bugs, agent: Optional[str] = None) -> 'RunReport':
        bugs = tuple(bugs)
        counts = {severity: 0 for severity in Severity}
        for bug in bugs:
            counts[bug.severity] += 1

        return cls(
            agent=agent,
            total_bugs=len(bugs),
            critical=counts[Severity.CRITICAL],
            high=counts[Severity.HIGH],
            medium=counts[Severity.MEDIUM],
            low=counts[Severity.LOW],
            bugs=bugs
        )

    def count(self, severity: Union[Severity, str]) -> int:
        return getattr(self, Severity.parse(severity).value)
