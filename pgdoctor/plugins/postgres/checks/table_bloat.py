"""
Table Bloat Analysis

Estimates how much storage each table uses beyond what its live rows need,
without scanning the tables. A table is flagged when most of its space is
bloat and autovacuum or autoanalyze has not processed it recently.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from pgdoctor.plugins.common.check_base import build_result
from pgdoctor.plugins.common.check_helpers import format_bytes, format_timestamp
from pgdoctor.plugins.common.models import CheckCategory, ValidationResult, ok, warn
from pgdoctor.plugins.postgres.utils.qrylib.table_bloat import (
    TUPLE_OVERHEAD_BYTES,
    get_table_bloat_query,
)

logger = logging.getLogger(__name__)

BLOAT_PERCENT_THRESHOLD = 60.0
STALE_MAINTENANCE_AGE = timedelta(days=5)


@dataclass(frozen=True)
class TableBloatEstimate:
    schema: str
    table: str
    actual_size_bytes: int
    estimated_bloat_bytes: int
    bloat_percentage: float
    last_autovacuum: Optional[datetime] = None
    last_autoanalyze: Optional[datetime] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.table}"


def estimate_table_bloat(schema, table, live_tuples, avg_row_width, actual_size_bytes,
                         last_autovacuum=None, last_autoanalyze=None) -> Optional[TableBloatEstimate]:
    """
    Estimates bloat for one table from its statistics.

    The ideal size is live_tuples * (avg_row_width + TUPLE_OVERHEAD_BYTES);
    anything above that is counted as bloat. This is the reference for the
    server-side estimate in qrylib.table_bloat; both must stay in step.

    Returns:
        TableBloatEstimate or None: None when the table has no live rows, no
        size, or no estimated bloat.
    """
    if live_tuples <= 0 or actual_size_bytes <= 0:
        return None

    ideal_size = live_tuples * (avg_row_width + TUPLE_OVERHEAD_BYTES)
    bloat_bytes = max(0, actual_size_bytes - ideal_size)
    if bloat_bytes <= 0:
        return None

    return TableBloatEstimate(
        schema=schema,
        table=table,
        actual_size_bytes=actual_size_bytes,
        estimated_bloat_bytes=int(bloat_bytes),
        bloat_percentage=round(bloat_bytes / actual_size_bytes * 100, 2),
        last_autovacuum=last_autovacuum,
        last_autoanalyze=last_autoanalyze,
    )


def estimates_from_rows(rows) -> List[TableBloatEstimate]:
    """
    Converts bloat query rows into estimates, largest bloat first.

    Row layout: (schema, table, size_bytes, last_autovacuum, last_autoanalyze,
    bloat_bytes, bloat_percentage).
    """
    estimates = [
        TableBloatEstimate(
            schema=row[0],
            table=row[1],
            actual_size_bytes=int(row[2]),
            last_autovacuum=row[3],
            last_autoanalyze=row[4],
            estimated_bloat_bytes=int(row[5]),
            bloat_percentage=float(row[6]),
        )
        for row in rows
        if row[5] and int(row[5]) > 0
    ]
    estimates.sort(key=lambda e: e.estimated_bloat_bytes, reverse=True)
    return estimates


def is_stale(timestamp: Optional[datetime], now: datetime) -> bool:
    """A maintenance timestamp is stale if it is missing or older than five days."""
    if timestamp is None:
        return True
    # timestamptz columns come back aware; naive values are taken as UTC.
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - timestamp > STALE_MAINTENANCE_AGE


def is_flagged(estimate: TableBloatEstimate, now: datetime) -> bool:
    if estimate.bloat_percentage <= BLOAT_PERCENT_THRESHOLD:
        return False
    return is_stale(estimate.last_autovacuum, now) or is_stale(estimate.last_autoanalyze, now)


def validate_bloat(estimates: Sequence[TableBloatEstimate], now: Optional[datetime] = None) -> List[ValidationResult]:
    """Flags heavily bloated tables whose maintenance is stale."""
    if now is None:
        now = datetime.now(timezone.utc)

    validations = []
    for estimate in estimates:
        if not is_flagged(estimate, now):
            continue
        validations.append(warn(
            f"table_bloat_{estimate.qualified_name}",
            f"Table {estimate.qualified_name} has {estimate.bloat_percentage:.2f}% estimated bloat "
            f"({format_bytes(estimate.estimated_bloat_bytes)}). "
            f"Last autovacuum: {format_timestamp(estimate.last_autovacuum)}, "
            f"last autoanalyze: {format_timestamp(estimate.last_autoanalyze)}.",
        ))

    if not validations:
        validations.append(ok(
            "table_bloat",
            f"No tables with significant bloat and stale maintenance among "
            f"{len(estimates)} table(s) with estimated bloat.",
        ))

    return validations


class TableBloatCheck:
    """Estimates per-table bloat and flags tables that need a VACUUM."""

    id = "table_bloat"
    name = "Table Bloat Analysis"
    category = CheckCategory.STORAGE

    def __init__(self, clock=None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, connector):
        rows = connector.execute_query(get_table_bloat_query())
        estimates = estimates_from_rows(rows)
        logger.debug(f"Estimated bloat for {len(estimates)} table(s)")
        return build_result(self, validate_bloat(estimates, self._clock()))
