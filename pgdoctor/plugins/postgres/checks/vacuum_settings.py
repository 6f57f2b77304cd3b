"""
Vacuum Settings Check

Evaluates the global autovacuum and maintenance settings that most often
cause bloat or slow maintenance when misconfigured. Each setting is judged on
its own; settings that are missing from the server or cannot be parsed are
skipped rather than reported.
"""

import logging
from typing import Dict, List, Optional, Tuple

from pgdoctor.plugins.common.check_base import build_result
from pgdoctor.plugins.common.check_helpers import (
    MIB,
    parse_float_setting,
    parse_setting_value,
)
from pgdoctor.plugins.common.models import CheckCategory, ValidationResult, critical, ok, warn
from pgdoctor.plugins.postgres.utils.qrylib.vacuum_settings import get_vacuum_settings_query

logger = logging.getLogger(__name__)

# setting name -> (raw value, unit)
Settings = Dict[str, Tuple[str, Optional[str]]]


def _int_setting(settings: Settings, name: str) -> Optional[int]:
    if name not in settings:
        return None
    raw, unit = settings[name]
    return parse_setting_value(raw, unit)


def _float_setting(settings: Settings, name: str) -> Optional[float]:
    if name not in settings:
        return None
    raw, _ = settings[name]
    return parse_float_setting(raw)


def _mebibytes(settings: Settings, name: str) -> Optional[int]:
    value = _int_setting(settings, name)
    if value is None:
        return None
    return value // MIB


def check_autovacuum_scale_factors(settings: Settings) -> List[ValidationResult]:
    validations = []

    analyze_factor = _float_setting(settings, 'autovacuum_analyze_scale_factor')
    if analyze_factor is not None:
        if analyze_factor > 0.1:
            validations.append(warn(
                'autovacuum_analyze_scale_factor',
                f"autovacuum_analyze_scale_factor is {analyze_factor}. Values > 0.1 may delay "
                "ANALYZE on large tables, affecting query planning.",
            ))
        else:
            validations.append(ok(
                'autovacuum_analyze_scale_factor',
                f"autovacuum_analyze_scale_factor is {analyze_factor} (optimal).",
            ))

    vacuum_factor = _float_setting(settings, 'autovacuum_vacuum_scale_factor')
    if vacuum_factor is not None:
        if vacuum_factor > 0.2:
            validations.append(warn(
                'autovacuum_vacuum_scale_factor',
                f"autovacuum_vacuum_scale_factor is {vacuum_factor}. Values > 0.2 may cause "
                "bloat in large tables.",
            ))
        elif vacuum_factor > 0.1:
            validations.append(ok(
                'autovacuum_vacuum_scale_factor',
                f"autovacuum_vacuum_scale_factor is {vacuum_factor} (acceptable).",
            ))
        else:
            validations.append(ok(
                'autovacuum_vacuum_scale_factor',
                f"autovacuum_vacuum_scale_factor is {vacuum_factor} (optimal).",
            ))

    return validations


def check_autovacuum_workers(settings: Settings) -> List[ValidationResult]:
    workers = _int_setting(settings, 'autovacuum_max_workers')
    if workers is None:
        return []

    if workers < 3:
        return [warn(
            'autovacuum_max_workers',
            f"autovacuum_max_workers is {workers}. Consider increasing to at least 3 for "
            "better concurrent vacuum performance.",
        )]
    if workers > 10:
        return [warn(
            'autovacuum_max_workers',
            f"autovacuum_max_workers is {workers}. Very high values may cause resource contention.",
        )]
    return [ok('autovacuum_max_workers', f"autovacuum_max_workers is {workers} (optimal).")]


def check_maintenance_work_mem(settings: Settings) -> List[ValidationResult]:
    mem_mb = _mebibytes(settings, 'maintenance_work_mem')
    if mem_mb is None:
        return []

    if mem_mb < 64:
        return [critical(
            'maintenance_work_mem',
            f"maintenance_work_mem is {mem_mb} MB. This is too low and will significantly slow "
            "down VACUUM and index creation. Increase to at least 256 MB.",
        )]
    if mem_mb < 256:
        return [warn(
            'maintenance_work_mem',
            f"maintenance_work_mem is {mem_mb} MB. Consider increasing to at least 256 MB for "
            "better maintenance performance.",
        )]
    if mem_mb > 2048:
        return [warn(
            'maintenance_work_mem',
            f"maintenance_work_mem is {mem_mb} MB. Very high values (>2GB) may not provide "
            "additional benefits.",
        )]
    return [ok('maintenance_work_mem', f"maintenance_work_mem is {mem_mb} MB (optimal).")]


def check_vacuum_cost_settings(settings: Settings) -> List[ValidationResult]:
    # Cost delay and cost limit only have WARN and OK tiers.
    validations = []

    delay_ms = _int_setting(settings, 'vacuum_cost_delay')
    if delay_ms is not None:
        if delay_ms > 10:
            validations.append(warn(
                'vacuum_cost_delay',
                f"vacuum_cost_delay is {delay_ms} ms. High values slow down vacuum. Consider "
                "reducing if vacuum is not keeping up.",
            ))
        else:
            validations.append(ok('vacuum_cost_delay', f"vacuum_cost_delay is {delay_ms} ms (acceptable)."))

    limit = _int_setting(settings, 'vacuum_cost_limit')
    if limit is not None:
        if limit < 200:
            validations.append(warn(
                'vacuum_cost_limit',
                f"vacuum_cost_limit is {limit}. Low values throttle vacuum too much. Consider "
                "increasing to at least 200.",
            ))
        else:
            validations.append(ok('vacuum_cost_limit', f"vacuum_cost_limit is {limit} (acceptable)."))

    return validations


def check_work_mem(settings: Settings) -> List[ValidationResult]:
    mem_mb = _mebibytes(settings, 'work_mem')
    if mem_mb is None:
        return []

    if mem_mb < 4:
        return [warn(
            'work_mem',
            f"work_mem is {mem_mb} MB. This is very low and may cause excessive disk sorts. "
            "Consider increasing to at least 4 MB.",
        )]
    if mem_mb > 1024:
        return [warn(
            'work_mem',
            f"work_mem is {mem_mb} MB. Very high values can cause memory issues with many "
            "concurrent connections. Monitor memory usage carefully.",
        )]
    return [ok('work_mem', f"work_mem is {mem_mb} MB (acceptable).")]


def validate_settings(settings: Settings) -> List[ValidationResult]:
    """Runs every setting validator and falls back to a single OK entry."""
    validations = []
    validations.extend(check_autovacuum_scale_factors(settings))
    validations.extend(check_autovacuum_workers(settings))
    validations.extend(check_maintenance_work_mem(settings))
    validations.extend(check_vacuum_cost_settings(settings))
    validations.extend(check_work_mem(settings))

    if not validations:
        validations.append(ok(
            'vacuum_settings',
            "All vacuum-related settings are within acceptable ranges.",
        ))

    return validations


def settings_from_rows(rows) -> Settings:
    """Builds the name -> (value, unit) mapping from (name, setting, unit) rows."""
    return {row[0]: (row[1], row[2]) for row in rows}


class VacuumSettingsCheck:
    """Checks autovacuum and maintenance memory configuration."""

    id = "vacuum_settings"
    name = "Vacuum Settings Check"
    category = CheckCategory.PERFORMANCE

    def execute(self, connector):
        rows = connector.execute_query(get_vacuum_settings_query())
        settings = settings_from_rows(rows)
        logger.debug(f"Loaded {len(settings)} vacuum-related settings")
        return build_result(self, validate_settings(settings))
