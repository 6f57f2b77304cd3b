"""
The contract every health check implements.

Checks are plain classes that satisfy the Check protocol structurally; they
do not inherit from a shared base. A registry is simply an ordered list of
check instances (see plugins/postgres/reports/).
"""

from typing import Any, Protocol, Sequence, runtime_checkable

from .models import CheckCategory, CheckResult, ValidationResult


@runtime_checkable
class Check(Protocol):
    """A single diagnostic heuristic."""

    @property
    def id(self) -> str:
        """Stable identifier used by --include / --exclude."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name shown in the report."""
        ...

    @property
    def category(self) -> CheckCategory:
        ...

    def execute(self, connector: Any) -> CheckResult:
        """
        Runs the check against an established connection.

        Args:
            connector: Object exposing ``execute_query(sql) -> list of rows``.

        Raises:
            QueryExecutionError: If a query issued by the check fails.
        """
        ...


def build_result(check: Check, validations: Sequence[ValidationResult]) -> CheckResult:
    """Wraps validations into a CheckResult carrying the check's identity."""
    return CheckResult(
        check_id=check.id,
        check_name=check.name,
        category=check.category,
        validations=tuple(validations),
    )
