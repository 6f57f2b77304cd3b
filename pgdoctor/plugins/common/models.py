"""
Result model shared by every health check.

Checks never build report text directly. They return a CheckResult holding
an ordered tuple of ValidationResult entries, and the overall status of a
check is always derived from those entries.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple


class CheckStatus(Enum):
    """Severity of a finding, ordered OK < WARN < CRITICAL."""
    OK = (0, "OK")
    WARN = (1, "WARN")
    CRITICAL = (2, "CRITICAL")

    @property
    def exit_code(self) -> int:
        """Process exit code for a run whose aggregate status is this one."""
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    def __lt__(self, other):
        if not isinstance(other, CheckStatus):
            return NotImplemented
        return self.exit_code < other.exit_code

    def __le__(self, other):
        if not isinstance(other, CheckStatus):
            return NotImplemented
        return self.exit_code <= other.exit_code

    def __gt__(self, other):
        if not isinstance(other, CheckStatus):
            return NotImplemented
        return self.exit_code > other.exit_code

    def __ge__(self, other):
        if not isinstance(other, CheckStatus):
            return NotImplemented
        return self.exit_code >= other.exit_code

    def __str__(self):
        return self.label


class CheckCategory(Enum):
    """Fixed classification taxonomy; every check declares exactly one."""
    PERFORMANCE = "performance"
    STORAGE = "storage"
    INDEXES = "indexes"
    SETTINGS = "settings"
    ARCHITECTURE = "architecture"

    @classmethod
    def from_name(cls, name: str) -> "CheckCategory":
        """
        Looks up a category by its name, ignoring case and surrounding spaces.

        Raises:
            ValueError: If the name is not a known category.
        """
        normalized = name.strip().lower()
        for category in cls:
            if category.value == normalized:
                return category
        valid = ", ".join(c.value for c in cls)
        raise ValueError(f"Unknown check category '{name}'. Valid categories: {valid}")

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """A single named outcome produced by a check."""
    name: str
    status: CheckStatus
    message: str


@dataclass(frozen=True)
class CheckResult:
    """All validation outcomes of one check execution."""
    check_id: str
    check_name: str
    category: CheckCategory
    validations: Tuple[ValidationResult, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but always store a tuple.
        object.__setattr__(self, "validations", tuple(self.validations))

    @property
    def overall_status(self) -> CheckStatus:
        return max_status(v.status for v in self.validations)


def max_status(statuses: Iterable[CheckStatus]) -> CheckStatus:
    """Returns the most severe status, or OK when there are none."""
    return max(statuses, default=CheckStatus.OK)


def aggregate_status(results: Iterable[CheckResult]) -> CheckStatus:
    """Combines the overall status of several check results."""
    return max_status(r.overall_status for r in results)


def ok(name: str, message: str) -> ValidationResult:
    return ValidationResult(name, CheckStatus.OK, message)


def warn(name: str, message: str) -> ValidationResult:
    return ValidationResult(name, CheckStatus.WARN, message)


def critical(name: str, message: str) -> ValidationResult:
    return ValidationResult(name, CheckStatus.CRITICAL, message)
