import io
import json
import unittest
from unittest.mock import MagicMock, patch

from pgdoctor.main import EXIT_SETUP_ERROR, HealthCheck, list_checks, main
from pgdoctor.plugins.common.errors import DatabaseConnectionError, QueryExecutionError
from pgdoctor.plugins.common.models import CheckCategory
from pgdoctor.plugins.postgres import PostgresPlugin
from pgdoctor.utils.check_selection import CheckSelection

GIB = 1024 ** 3


def fake_query(table_size=1024, fail_on=None):
    def execute_query(query, params=None):
        if fail_on and fail_on in query:
            raise QueryExecutionError("permission denied", query=query)
        if "version()" in query:
            return [("PostgreSQL 15.3 on x86_64-pc-linux-gnu",)]
        if "pg_tables" in query:
            return [("public", "orders", table_size)]
        if "pg_settings" in query:
            return [("work_mem", "4096", "kB")]
        if "pg_stat_user_tables" in query:
            return [("public", "orders", 1000, None, None, 900, 90.0)]
        return []
    return execute_query


class TestHealthCheck(unittest.TestCase):
    def setUp(self):
        self.connector = MagicMock()
        self.connector.execute_query.side_effect = fake_query()
        self.plugin = PostgresPlugin()
        self.plugin.get_connector = MagicMock(return_value=self.connector)
        self.stream = io.StringIO()

    def _health_check(self, output_format='text'):
        return HealthCheck({'dsn': 'postgresql://x/y'}, self.plugin, output_format, self.stream)

    def test_run_default_report(self):
        exit_code = self._health_check().run_report()
        self.assertEqual(exit_code, 0)
        self.assertIn("Overall Status: OK", self.stream.getvalue())
        self.connector.connect.assert_called_once()
        self.connector.disconnect.assert_called_once()

    def test_warning_exit_code(self):
        self.connector.execute_query.side_effect = fake_query(table_size=15 * GIB)
        self.assertEqual(self._health_check().run_report(), 1)

    def test_failed_check_does_not_stop_run(self):
        self.connector.execute_query.side_effect = fake_query(fail_on="pg_tables")
        exit_code = self._health_check('json').run_report()
        data = json.loads(self.stream.getvalue())
        self.assertEqual(exit_code, 0)
        self.assertEqual([c['check_id'] for c in data['checks']], ["pg_version", "vacuum_settings"])
        self.assertEqual(data['failures'][0]['check_id'], "table_sizes")

    def test_bloat_report(self):
        exit_code = self._health_check('json').run_report('bloat')
        data = json.loads(self.stream.getvalue())
        self.assertEqual(exit_code, 1)
        self.assertEqual([c['check_id'] for c in data['checks']], ["table_bloat"])

    def test_include_opt_in_check(self):
        selection = CheckSelection(include=["pg_version", "table_bloat"])
        self._health_check('json').run_report('default', selection)
        data = json.loads(self.stream.getvalue())
        self.assertEqual([c['check_id'] for c in data['checks']], ["pg_version", "table_bloat"])

    def test_default_run_excludes_bloat(self):
        self._health_check('json').run_report('default', CheckSelection(categories=[CheckCategory.STORAGE]))
        data = json.loads(self.stream.getvalue())
        self.assertEqual([c['check_id'] for c in data['checks']], ["table_sizes"])

    def test_connection_failure_propagates(self):
        self.connector.connect.side_effect = DatabaseConnectionError("refused")
        with self.assertRaises(DatabaseConnectionError):
            self._health_check().run_report()
        self.connector.execute_query.assert_not_called()


class TestMain(unittest.TestCase):
    def test_missing_connection_target(self):
        with patch.dict('os.environ', {}, clear=True):
            self.assertEqual(main(['run']), EXIT_SETUP_ERROR)

    def test_unknown_category(self):
        self.assertEqual(main(['-c', 'postgresql://x/y', 'run', '--categories', 'bogus']), EXIT_SETUP_ERROR)

    @patch('pgdoctor.main.HealthCheck')
    def test_connection_error_exit_code(self, mock_health_check):
        mock_health_check.return_value.run_report.side_effect = DatabaseConnectionError("refused")
        self.assertEqual(main(['-c', 'postgresql://x/y', 'check-bloat']), EXIT_SETUP_ERROR)

    @patch('pgdoctor.main.HealthCheck')
    def test_run_passes_selection(self, mock_health_check):
        mock_health_check.return_value.run_report.return_value = 2
        exit_code = main(['-c', 'postgresql://x/y', 'run', '--include', 'pg_version', '--exclude', 'table_sizes'])
        self.assertEqual(exit_code, 2)
        report_name, selection = mock_health_check.return_value.run_report.call_args.args
        self.assertEqual(report_name, 'default')
        self.assertEqual(selection.include, ['pg_version'])
        self.assertEqual(selection.exclude, ['table_sizes'])
        self.assertIsNone(selection.categories)

    def test_list_checks(self):
        stream = io.StringIO()
        list_checks(PostgresPlugin(), stream)
        output = stream.getvalue()
        self.assertIn("pg_version", output)
        self.assertIn("table_bloat", output)
        self.assertIn("opt-in", output)


if __name__ == '__main__':
    unittest.main()
