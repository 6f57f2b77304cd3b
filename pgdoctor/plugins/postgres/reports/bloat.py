# Checks executed by the 'check-bloat' command.
# The bloat analysis scans statistics for every table, so it is kept out of
# the default report and only runs when asked for.

REPORT_CHECKS = [
    {'module': 'pgdoctor.plugins.postgres.checks.table_bloat', 'class': 'TableBloatCheck'},
]
