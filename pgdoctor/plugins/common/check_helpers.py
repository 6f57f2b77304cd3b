"""
Common helper functions for health checks.

Provides the unit handling shared by the checks: byte humanization and the
parsers that turn raw pg_settings values into numbers.
"""

import logging
import math
import re
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

BYTE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB', 'PB', 'EB']

KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024

# Multipliers converting a pg_settings unit into bytes or milliseconds.
SETTING_UNIT_MULTIPLIERS = {
    'kB': KIB,
    'MB': MIB,
    'GB': GIB,
    'ms': 1,
    's': 1000,
}

_PREFIXED_UNIT = re.compile(r'^(\d+)([A-Za-z]+)$')


def format_bytes(bytes_value: int, decimal_places: int = 2) -> str:
    """
    Format bytes into human-readable string (B, KB, MB, ... EB).

    The unit is picked from floor(log2(|bytes|) / 10), clamped to EB. The
    sign is kept separately from the magnitude.

    Example:
        format_bytes(0)              # "0 B"
        format_bytes(1023)           # "1023.00 B"
        format_bytes(1024)           # "1.00 KB"
        format_bytes(-1536)          # "-1.50 KB"
    """
    if bytes_value == 0:
        return "0 B"

    sign = "-" if bytes_value < 0 else ""
    magnitude = abs(bytes_value)

    unit_index = min(int(math.log2(magnitude) // 10), len(BYTE_UNITS) - 1)
    # Fractional inputs below one byte would give a negative exponent.
    unit_index = max(unit_index, 0)
    value = magnitude / (1024 ** unit_index)

    return f"{sign}{value:.{decimal_places}f} {BYTE_UNITS[unit_index]}"


def parse_setting_value(setting: str, unit: Optional[str] = None) -> Optional[int]:
    """
    Parses an integer pg_settings value and converts it to its base unit.

    Memory settings become bytes and time settings become milliseconds.
    Units with a numeric prefix, such as the ``8kB`` page unit, multiply the
    value by the prefix first. Unknown or missing units leave the value as is.

    Returns:
        int or None: The converted value, or None if ``setting`` is not an integer.
    """
    try:
        value = int(str(setting).strip())
    except (TypeError, ValueError):
        logger.debug(f"Could not parse integer setting value: {setting!r}")
        return None

    if not unit:
        return value

    match = _PREFIXED_UNIT.match(unit)
    if match:
        value *= int(match.group(1))
        unit = match.group(2)

    return value * SETTING_UNIT_MULTIPLIERS.get(unit, 1)


def parse_float_setting(setting: str) -> Optional[float]:
    """Parses a dimensionless pg_settings value such as a scale factor."""
    try:
        value = float(str(setting).strip())
    except (TypeError, ValueError):
        logger.debug(f"Could not parse float setting value: {setting!r}")
        return None
    if math.isnan(value):
        return None
    return value


def format_timestamp(value: Optional[datetime]) -> str:
    """Formats a maintenance timestamp for a report line, or 'never'."""
    if value is None:
        return "never"
    return value.strftime('%Y-%m-%d %H:%M:%S')
