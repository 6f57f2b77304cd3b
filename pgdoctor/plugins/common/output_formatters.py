"""
Output formatting for health check reports.

Renders a Report as console text. Rendering never exits the process; the
caller decides what to do with the exit code.
"""

import logging

from .models import CheckStatus

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    CheckStatus.OK: "✓",
    CheckStatus.WARN: "⚠",
    CheckStatus.CRITICAL: "✗",
}

RULE_WIDTH = 80


class ConsoleFormatter:
    """Formats check results as a plain-text report."""

    def __init__(self, title="PostgreSQL Doctor Report"):
        self.title = title

    def format_banner(self):
        inner = RULE_WIDTH - 2
        return "\n".join([
            "╔" + "═" * inner + "╗",
            "║" + self.title.center(inner) + "║",
            "╚" + "═" * inner + "╝",
        ])

    def format_result(self, result):
        """Formats one CheckResult with its validations."""
        status = result.overall_status
        lines = [
            "━" * RULE_WIDTH,
            f"{STATUS_ICONS[status]} [{status}] {result.check_name} (Category: {result.category})",
            "━" * RULE_WIDTH,
        ]
        for validation in result.validations:
            lines.append(f"  {STATUS_ICONS[validation.status]} [{validation.status}] {validation.message}")
        return "\n".join(lines)

    def format_failures(self, failures):
        if not failures:
            return ""
        lines = ["━" * RULE_WIDTH, "Checks that could not be completed:", "━" * RULE_WIDTH]
        for failure in failures:
            lines.append(f"  ✗ {failure.check_name} ({failure.check_id}): {failure.error}")
        return "\n".join(lines)

    def format_summary(self, status):
        return "\n".join([
            "═" * RULE_WIDTH,
            f"{STATUS_ICONS[status]} Overall Status: {status}",
            "═" * RULE_WIDTH,
        ])

    def format_report(self, report):
        """
        Formats a full Report.

        Args:
            report: A Report from CheckRunner.run().

        Returns:
            str: The report text, ending with the overall status.
        """
        sections = [self.format_banner(), ""]
        for result in report.results:
            sections.append(self.format_result(result))
            sections.append("")
        failures = self.format_failures(report.failures)
        if failures:
            sections.append(failures)
            sections.append("")
        sections.append(self.format_summary(report.overall_status))
        return "\n".join(sections)
