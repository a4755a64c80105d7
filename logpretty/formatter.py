"""Turn one input line into its printable form."""

import json
from typing import Any

from logpretty.colors import colorize, map_colors
from logpretty.fields import DEFAULT_POLICY, FieldPolicy, order_fields
from logpretty.levels import detect_level


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_record(line: str) -> dict[str, Any] | None:
    """Decode line as a JSON object. Returns None for anything else.

    Objects that cannot be written back out as UTF-8 (lone surrogate
    escapes) or that nest too deeply to decode count as malformed.
    """
    try:
        data = json.loads(line, parse_constant=_reject_constant)
        if not isinstance(data, dict):
            return None
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError):
        return None
    return data


def render_value(value: Any) -> str:
    """Strings are shown unquoted; other values as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def format_record(
    record: dict[str, Any],
    policy: FieldPolicy = DEFAULT_POLICY,
    color: bool = True,
) -> str:
    key_color, value_color = map_colors(detect_level(record))

    lines = []
    for key in order_fields(record, policy):
        if key not in record:
            continue
        lines.append(
            colorize(f"{key}: ", key_color, color)
            + colorize(render_value(record[key]), value_color, color)
        )
    lines.append("")
    return "".join(line + "\n" for line in lines)


def format_passthrough(line: str) -> str:
    return f"{line}\n\n"


def format_line(
    line: str,
    policy: FieldPolicy = DEFAULT_POLICY,
    color: bool = True,
) -> str:
    """Return the full output block for one trimmed input line.

    Lines that are not a JSON object come back verbatim, uncolored,
    followed by a blank separator line.
    """
    record = parse_record(line)
    if record is None:
        return format_passthrough(line)
    return format_record(record, policy, color)
