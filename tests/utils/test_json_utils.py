import json
import unittest
from datetime import datetime
from decimal import Decimal

from pgdoctor.plugins.common.models import CheckCategory, CheckResult, CheckStatus, ValidationResult
from pgdoctor.utils.check_runner import CheckFailure, Report
from pgdoctor.utils.json_utils import report_to_dict, safe_json_dumps


class TestJsonUtils(unittest.TestCase):
    def test_encoder_handles_database_types(self):
        payload = json.loads(safe_json_dumps({
            'size': Decimal("1.5"),
            'at': datetime(2024, 1, 1, 0, 0, 0),
            'status': CheckStatus.CRITICAL,
        }))
        self.assertEqual(payload, {'size': 1.5, 'at': "2024-01-01T00:00:00", 'status': "CRITICAL"})

    def test_report_to_dict(self):
        report = Report(
            results=[CheckResult("table_sizes", "Table Sizes Check", CheckCategory.STORAGE, [
                ValidationResult("total_size", CheckStatus.OK, "Total database size: 1.00 KB across 1 table(s)"),
            ])],
            failures=[CheckFailure("pg_version", "PostgreSQL Version Check", "timeout")],
        )
        data = json.loads(safe_json_dumps(report_to_dict(report)))
        self.assertEqual(data['overall_status'], "OK")
        self.assertEqual(data['exit_code'], 0)
        self.assertEqual(data['checks'][0]['category'], "storage")
        self.assertEqual(data['checks'][0]['validations'][0]['name'], "total_size")
        self.assertEqual(data['failures'][0]['check_id'], "pg_version")


if __name__ == '__main__':
    unittest.main()
