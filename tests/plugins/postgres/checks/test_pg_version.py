import unittest
from unittest.mock import MagicMock

from pgdoctor.plugins.common.models import CheckCategory, CheckStatus
from pgdoctor.plugins.postgres.checks.pg_version import VersionCheck, parse_version, validate_version


class TestParseVersion(unittest.TestCase):
    def test_full_version_string(self):
        self.assertEqual(parse_version("PostgreSQL 15.3 on x86_64-pc-linux-gnu"), 15)

    def test_three_part_version(self):
        self.assertEqual(parse_version("PostgreSQL 9.6.24"), 9)

    def test_unparseable(self):
        self.assertIsNone(parse_version("Invalid version string"))
        self.assertIsNone(parse_version("PostgreSQL"))
        self.assertIsNone(parse_version(""))

    def test_major_must_be_plain_digits(self):
        self.assertIsNone(parse_version("PostgreSQL 1_5.2"))
        self.assertIsNone(parse_version("PostgreSQL beta.1"))
        self.assertIsNone(parse_version("PostgreSQL \u0661\u0665.2"))
        self.assertEqual(parse_version("PostgreSQL +15.2"), 15)

    def test_underscore_version_is_unparseable_warning(self):
        validations = validate_version("PostgreSQL 1_5.2")
        self.assertEqual(validations[0].status, CheckStatus.WARN)
        self.assertIn("Could not parse version from", validations[0].message)


class TestValidateVersion(unittest.TestCase):
    def test_supported(self):
        validations = validate_version("PostgreSQL 15.3 on x86_64-pc-linux-gnu")
        self.assertEqual(len(validations), 1)
        self.assertEqual(validations[0].status, CheckStatus.OK)
        self.assertIn("supported", validations[0].message)

    def test_end_of_life(self):
        validations = validate_version("PostgreSQL 9.6.24")
        self.assertEqual(validations[0].status, CheckStatus.CRITICAL)
        self.assertIn("end-of-life", validations[0].message)

    def test_approaching_end_of_life(self):
        validations = validate_version("PostgreSQL 11.5")
        self.assertEqual(validations[0].status, CheckStatus.WARN)
        self.assertIn("approaching end-of-life", validations[0].message)

    def test_boundaries(self):
        self.assertEqual(validate_version("PostgreSQL 10.0")[0].status, CheckStatus.WARN)
        self.assertEqual(validate_version("PostgreSQL 12.0")[0].status, CheckStatus.OK)

    def test_unparseable_is_warning(self):
        validations = validate_version("Invalid version string")
        self.assertEqual(validations[0].status, CheckStatus.WARN)
        self.assertIn("Could not parse", validations[0].message)
        self.assertIn("Invalid version string", validations[0].message)


class TestVersionCheck(unittest.TestCase):
    def setUp(self):
        self.connector = MagicMock()
        self.connector.execute_query.return_value = [("PostgreSQL 16.2 on aarch64-unknown-linux-gnu",)]

    def test_identity(self):
        check = VersionCheck()
        self.assertEqual(check.id, "pg_version")
        self.assertEqual(check.category, CheckCategory.SETTINGS)

    def test_execute(self):
        result = VersionCheck().execute(self.connector)
        self.assertEqual(result.check_id, "pg_version")
        self.assertEqual(result.check_name, "PostgreSQL Version Check")
        self.assertEqual(result.overall_status, CheckStatus.OK)
        self.connector.execute_query.assert_called_once()


if __name__ == '__main__':
    unittest.main()
