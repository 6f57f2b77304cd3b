"""
Table Sizes Check

Reports the total size of user tables and flags individual tables that are
large enough to warrant partitioning or archiving.
"""

from typing import List, Sequence, Tuple

from pgdoctor.plugins.common.check_base import build_result
from pgdoctor.plugins.common.check_helpers import GIB, format_bytes
from pgdoctor.plugins.common.models import CheckCategory, ValidationResult, critical, ok, warn
from pgdoctor.plugins.postgres.utils.qrylib.table_sizes import get_table_sizes_query

WARN_THRESHOLD_BYTES = 10 * GIB
CRITICAL_THRESHOLD_BYTES = 50 * GIB

TableSize = Tuple[str, str, int]


def validate_tables(tables: Sequence[TableSize]) -> List[ValidationResult]:
    """
    Classifies (schema, table, size_bytes) tuples.

    Emits a total-size line followed by one entry per large table. When no
    table is large, an explicit OK entry says so.
    """
    if not tables:
        return [ok("table_count", "No tables found in the database.")]

    total_size = sum(size for _, _, size in tables)
    validations = [ok(
        "total_size",
        f"Total database size: {format_bytes(total_size)} across {len(tables)} table(s)",
    )]

    flagged = False
    for schema, table, size in tables:
        name = f"table_size_{schema}.{table}"
        if size >= CRITICAL_THRESHOLD_BYTES:
            validations.append(critical(
                name,
                f"Table {schema}.{table} is very large: {format_bytes(size)}. "
                "Consider partitioning or archiving.",
            ))
            flagged = True
        elif size >= WARN_THRESHOLD_BYTES:
            validations.append(warn(
                name,
                f"Table {schema}.{table} is large: {format_bytes(size)}. "
                "Monitor growth and consider optimization.",
            ))
            flagged = True

    if not flagged:
        validations.append(ok("large_tables", "No unusually large tables detected."))

    return validations


class TableSizesCheck:
    """Flags user tables above the size thresholds."""

    id = "table_sizes"
    name = "Table Sizes Check"
    category = CheckCategory.STORAGE

    def execute(self, connector):
        rows = connector.execute_query(get_table_sizes_query())
        tables = [(row[0], row[1], int(row[2] or 0)) for row in rows]
        return build_result(self, validate_tables(tables))
