# This file defines which checks the 'run' command executes and in what order.
# Checks run sequentially in list order against one shared connection.

REPORT_CHECKS = [
    {'module': 'pgdoctor.plugins.postgres.checks.pg_version', 'class': 'VersionCheck'},
    {'module': 'pgdoctor.plugins.postgres.checks.table_sizes', 'class': 'TableSizesCheck'},
    {'module': 'pgdoctor.plugins.postgres.checks.vacuum_settings', 'class': 'VacuumSettingsCheck'},
]
