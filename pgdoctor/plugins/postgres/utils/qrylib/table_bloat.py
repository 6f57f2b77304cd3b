"""
Query library for the table_bloat check.

The estimate avoids a full table scan: the ideal size of a table is its live
tuple count times the sum of the per-column average widths from pg_stats plus
a fixed per-tuple overhead. Only the parent-only statistics rows are summed
(pg_stats also carries an inherited row per column for tables with children),
and tables that have never been analyzed are skipped since their row width is
unknown.
"""

# Tuple header, line pointer and alignment padding, in bytes.
TUPLE_OVERHEAD_BYTES = 35


def get_table_bloat_query():
    """
    Returns one row per table with estimated bloat, largest bloat first.

    Columns: schema, table, size_bytes, last_autovacuum, last_autoanalyze,
    bloat_bytes, bloat_percentage.
    """
    return f"""
        WITH table_widths AS (
            SELECT
                schemaname,
                tablename,
                SUM(avg_width)::bigint AS avg_row_width
            FROM pg_stats
            WHERE schemaname NOT IN ('pg_catalog', 'information_schema')
              AND NOT inherited
            GROUP BY schemaname, tablename
        ),
        table_estimates AS (
            SELECT
                st.schemaname,
                st.relname,
                pg_table_size(st.relid)::bigint AS size_bytes,
                st.last_autovacuum,
                st.last_autoanalyze,
                (st.n_live_tup * (tw.avg_row_width + {TUPLE_OVERHEAD_BYTES}))::bigint AS ideal_bytes
            FROM pg_stat_user_tables st
            JOIN table_widths tw
                ON tw.schemaname = st.schemaname AND tw.tablename = st.relname
            WHERE st.n_live_tup > 0
        ),
        table_bloat AS (
            SELECT
                schemaname,
                relname,
                size_bytes,
                last_autovacuum,
                last_autoanalyze,
                GREATEST(size_bytes - ideal_bytes, 0)::bigint AS bloat_bytes
            FROM table_estimates
            WHERE size_bytes > 0
        )
        SELECT
            schemaname,
            relname,
            size_bytes,
            last_autovacuum,
            last_autoanalyze,
            bloat_bytes,
            ROUND((bloat_bytes::numeric / size_bytes::numeric) * 100, 2)::float8 AS bloat_percentage
        FROM table_bloat
        WHERE bloat_bytes > 0
        ORDER BY bloat_bytes DESC;
    """
