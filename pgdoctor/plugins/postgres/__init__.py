import importlib
import logging

# --- Import the components of this plugin ---
from .connector import PostgresConnector

logger = logging.getLogger(__name__)

REPORTS_PACKAGE = 'pgdoctor.plugins.postgres.reports'


class PostgresPlugin:
    """Wires the PostgreSQL connector to its check registries."""

    def get_connector(self, settings):
        """Returns an instance of the PostgreSQL connector."""
        return PostgresConnector(settings)

    def get_report_definition(self, report_name='default'):
        """
        Loads a report definition module from the 'reports' package.

        Raises:
            ValueError: If no report with that name exists.
        """
        try:
            report_module = importlib.import_module(f"{REPORTS_PACKAGE}.{report_name}")
        except ModuleNotFoundError as e:
            raise ValueError(f"Unknown report definition: '{report_name}'") from e
        return getattr(report_module, 'REPORT_CHECKS')

    def get_checks(self, report_name='default'):
        """
        Instantiates the checks of a report definition, in definition order.

        Returns:
            list: Check instances forming the registry for one run.
        """
        checks = []
        for entry in self.get_report_definition(report_name):
            module = importlib.import_module(entry['module'])
            check_class = getattr(module, entry['class'])
            checks.append(check_class())
        return checks

    def get_all_checks(self):
        """Returns the default checks followed by every opt-in check, without duplicates."""
        checks = self.get_checks('default')
        seen = {check.id for check in checks}
        for check in self.get_checks('bloat'):
            if check.id not in seen:
                checks.append(check)
                seen.add(check.id)
        return checks
