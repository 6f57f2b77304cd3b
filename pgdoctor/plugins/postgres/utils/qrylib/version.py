"""
Query library for the pg_version check.
"""


def get_version_query():
    """Returns the query for the server version string."""
    return "SELECT version();"
