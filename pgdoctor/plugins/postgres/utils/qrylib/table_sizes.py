"""
Query library for the table_sizes check.
"""


def get_table_sizes_query():
    """Returns (schema, table, size_bytes) for every user table, largest first."""
    return """
        SELECT
            schemaname,
            tablename,
            pg_total_relation_size(quote_ident(schemaname) || '.' || quote_ident(tablename))::bigint AS size_bytes
        FROM pg_tables
        WHERE schemaname NOT IN ('pg_catalog', 'information_schema')
        ORDER BY size_bytes DESC;
    """
