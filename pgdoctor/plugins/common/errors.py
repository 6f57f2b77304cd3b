"""
Exception hierarchy for pgdoctor.

Driver-specific errors (psycopg2) are wrapped by the connector so that the
runner and the entry point only deal with these types.
"""


class PgDoctorError(Exception):
    """Base class for all pgdoctor errors."""


class ConfigurationError(PgDoctorError):
    """Raised when settings or command line options are missing or invalid."""


class DatabaseConnectionError(PgDoctorError):
    """Raised when the database session cannot be established."""


class QueryExecutionError(PgDoctorError):
    """Raised when a query fails on an established connection."""

    def __init__(self, message, query=None):
        super().__init__(message)
        self.query = query
