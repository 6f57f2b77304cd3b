"""
Common utilities shared by all health checks.

This module provides reusable components for:
- The result model (statuses, categories, validation and check results)
- The Check protocol
- Unit parsing and byte formatting helpers
- Report formatting
"""

from .models import (
    CheckStatus,
    CheckCategory,
    ValidationResult,
    CheckResult,
    aggregate_status,
)
from .check_base import Check, build_result
from .check_helpers import format_bytes, parse_setting_value, parse_float_setting
from .errors import (
    PgDoctorError,
    ConfigurationError,
    DatabaseConnectionError,
    QueryExecutionError,
)
from .output_formatters import ConsoleFormatter

__all__ = [
    # Result model
    'CheckStatus',
    'CheckCategory',
    'ValidationResult',
    'CheckResult',
    'aggregate_status',

    # Check contract
    'Check',
    'build_result',

    # Helpers
    'format_bytes',
    'parse_setting_value',
    'parse_float_setting',

    # Errors
    'PgDoctorError',
    'ConfigurationError',
    'DatabaseConnectionError',
    'QueryExecutionError',

    # Formatters
    'ConsoleFormatter',
]
