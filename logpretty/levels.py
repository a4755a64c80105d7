"""Severity detection for decoded log records."""

from typing import Any

# Checked in order; the first key present decides.
LEVEL_ALIASES = ("level", "lvl", "lev", "l", "type")


def detect_level(record: dict[str, Any]) -> str | None:
    """Return the record's severity string, or None.

    The scan stops at the first alias present in the record. If that
    value is not a string the record has no severity, even when a later
    alias holds one.
    """
    for key in LEVEL_ALIASES:
        if key not in record:
            continue
        value = record[key]
        if isinstance(value, str):
            return value
        return None
    return None
