"""
Query library for the vacuum_settings check.
"""

MONITORED_SETTINGS = (
    'autovacuum_analyze_scale_factor',
    'autovacuum_max_workers',
    'autovacuum_vacuum_scale_factor',
    'maintenance_work_mem',
    'vacuum_cost_delay',
    'vacuum_cost_limit',
    'work_mem',
)


def get_vacuum_settings_query():
    """Returns (name, setting, unit) rows for the monitored settings."""
    names = ", ".join(f"'{name}'" for name in MONITORED_SETTINGS)
    return f"""
        SELECT
            name::varchar,
            setting,
            unit
        FROM pg_settings
        WHERE name IN ({names})
        ORDER BY name;
    """
