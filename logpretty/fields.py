"""Display order of a record's fields."""

from dataclasses import dataclass
from typing import Any

FIRST_FIELDS = ("time",)
LAST_FIELDS = ("message",)
BLACKLISTED_FIELDS = ("level", "type", "lineno", "function", "env", "tag")


@dataclass(frozen=True)
class FieldPolicy:
    first: tuple[str, ...] = FIRST_FIELDS
    last: tuple[str, ...] = LAST_FIELDS
    blacklist: tuple[str, ...] = BLACKLISTED_FIELDS
    whitelist: tuple[str, ...] | None = None

    def is_shown(self, key: str) -> bool:
        """Blacklist wins over every other rule, including first/last."""
        if key in self.blacklist:
            return False
        if self.whitelist is not None and key not in self.whitelist:
            return False
        return True


DEFAULT_POLICY = FieldPolicy()


def order_fields(record: dict[str, Any], policy: FieldPolicy = DEFAULT_POLICY) -> list[str]:
    """Return the keys of record in display order.

    First-list keys lead, last-list keys trail, and every other shown key
    keeps the record's own iteration order in between. Only keys present
    in the record are returned, each at most once.
    """
    fields = [k for k in policy.first if k in record and policy.is_shown(k)]

    pinned = set(policy.first) | set(policy.last)
    for key in record:
        if key in pinned or not policy.is_shown(key):
            continue
        fields.append(key)

    for key in policy.last:
        # A name listed in both first and last is emitted once, up front.
        if key in record and key not in fields and policy.is_shown(key):
            fields.append(key)

    return fields
