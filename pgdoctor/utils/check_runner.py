"""
Defines the CheckRunner class, which executes a registry of health checks
against one database connection and collects their results.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pgdoctor.plugins.common.models import CheckResult, CheckStatus, aggregate_status
from pgdoctor.utils.check_selection import CheckSelection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckFailure:
    """A check that raised instead of producing a result."""
    check_id: str
    check_name: str
    error: str


@dataclass
class Report:
    """Results of one run, in registry order."""
    results: List[CheckResult] = field(default_factory=list)
    failures: List[CheckFailure] = field(default_factory=list)

    @property
    def overall_status(self) -> CheckStatus:
        return aggregate_status(self.results)

    @property
    def exit_code(self) -> int:
        return self.overall_status.exit_code


class CheckRunner:
    """Runs the selected checks sequentially on a shared connector.

    Attributes:
        connector (object): The connected database connector; every check
            receives this same instance.
        checks (list): The ordered check registry.
        selection (CheckSelection): Which checks of the registry to run.
    """

    def __init__(self, connector, checks, selection: Optional[CheckSelection] = None):
        self.connector = connector
        self.checks = list(checks)
        self.selection = selection or CheckSelection()

    def selected_checks(self):
        """Returns the checks that pass the selection, in registry order."""
        return [c for c in self.checks if self.selection.should_run(c.id, c.category)]

    def run(self) -> Report:
        """
        Executes each selected check once.

        A check that raises contributes no result; the error is logged and
        recorded on the report, and the run continues with the next check.

        Returns:
            Report: Collected results and failures.
        """
        report = Report()

        for check in self.selected_checks():
            logger.info(f"Running check: {check.name}")
            try:
                result = check.execute(self.connector)
            except Exception as e:
                logger.error(f"Error running check {check.name} ({check.id}): {e}")
                report.failures.append(CheckFailure(check.id, check.name, str(e)))
                continue
            report.results.append(result)

        return report
