"""
JSON serialization utilities for reports.
"""

import dataclasses
import json
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum


class UniversalJSONEncoder(json.JSONEncoder):
    """
    JSON encoder for report objects and database values.

    Usage:
        json.dumps(data, cls=UniversalJSONEncoder)
    """

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, timedelta):
            return obj.total_seconds()
        if isinstance(obj, Enum):
            return str(obj)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        return super().default(obj)


def report_to_dict(report):
    """
    Converts a Report into a plain dictionary for JSON output.

    Derived statuses are included so consumers do not need to recompute them.
    """
    return {
        'overall_status': str(report.overall_status),
        'exit_code': report.exit_code,
        'checks': [
            {
                'check_id': result.check_id,
                'check_name': result.check_name,
                'category': str(result.category),
                'status': str(result.overall_status),
                'validations': [
                    {'name': v.name, 'status': str(v.status), 'message': v.message}
                    for v in result.validations
                ],
            }
            for result in report.results
        ],
        'failures': [dataclasses.asdict(f) for f in report.failures],
    }


def safe_json_dumps(obj, **kwargs):
    """
    Serializes any object to a JSON string using UniversalJSONEncoder.

    Example:
        json_str = safe_json_dumps(report_to_dict(report), indent=2)
    """
    if 'cls' not in kwargs:
        kwargs['cls'] = UniversalJSONEncoder
    return json.dumps(obj, **kwargs)
