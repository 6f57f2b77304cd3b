"""
PostgreSQL Version Check

Classifies the server's major version as supported, approaching
end-of-life, or end-of-life.
"""

import logging
import re
from typing import List, Optional

from pgdoctor.plugins.common.check_base import build_result
from pgdoctor.plugins.common.models import CheckCategory, ValidationResult, critical, ok, warn
from pgdoctor.plugins.postgres.utils.qrylib.version import get_version_query

logger = logging.getLogger(__name__)

EOL_BEFORE_MAJOR = 10
SUPPORTED_FROM_MAJOR = 12

# ASCII digits with an optional sign; underscores and non-ASCII digits do not parse.
MAJOR_VERSION_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_version(version_string: str) -> Optional[int]:
    """
    Extracts the major version from a server version string.

    "PostgreSQL 15.3 on x86_64-pc-linux-gnu" -> 15

    Returns:
        int or None: The major version, or None if the string cannot be parsed.
    """
    tokens = (version_string or "").split()
    if len(tokens) < 2:
        return None
    major = tokens[1].split('.')[0]
    if not MAJOR_VERSION_PATTERN.fullmatch(major):
        return None
    return int(major)


def validate_version(version_string: str) -> List[ValidationResult]:
    major = parse_version(version_string)

    if major is None:
        return [warn("version_check", f"Could not parse version from: {version_string}")]
    if major < EOL_BEFORE_MAJOR:
        return [critical(
            "version_check",
            f"PostgreSQL version {major} is end-of-life and unsupported. Please upgrade immediately.",
        )]
    if major < SUPPORTED_FROM_MAJOR:
        return [warn(
            "version_check",
            f"PostgreSQL version {major} is approaching end-of-life. Consider upgrading.",
        )]
    return [ok("version_check", f"PostgreSQL version {major} is supported.")]


class VersionCheck:
    """Reports on the server's major version."""

    id = "pg_version"
    name = "PostgreSQL Version Check"
    category = CheckCategory.SETTINGS

    def execute(self, connector):
        rows = connector.execute_query(get_version_query())
        version_string = rows[0][0] if rows else ""
        logger.debug(f"Server version string: {version_string}")
        return build_result(self, validate_version(version_string))
