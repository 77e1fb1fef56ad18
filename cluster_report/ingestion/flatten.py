"""
Flatten nested cluster records into column-path -> string mappings.

    {"node_summary": {"ready": 3}}  ->  {"node_summary_ready": "3"}

Arrays keep only their first element. This is lossy on purpose: the
report has one cell per path, and existing sheets depend on these
column names. Do not switch to index-suffixed paths without updating
the downstream sheets.

A value with no path (a cluster record that is a bare scalar, or an array
whose first element is one) adds nothing, so no column has an empty name.
JSON null falls through to str() and shows up in the sheet as "None".
"""

from typing import Dict

SEPARATOR = "_"

FlatRecord = Dict[str, str]


def format_scalar(value) -> str:
    """Render a JSON scalar the way it should appear in a cell."""
    if isinstance(value, str):
        return value
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def join_path(prefix: str, key) -> str:
    return f"{prefix}{SEPARATOR}{key}" if prefix else str(key)


def flatten(value, prefix: str = "") -> FlatRecord:
    """
    Recursively flatten `value` into a FlatRecord.

    Objects join keys with "_", arrays recurse into their first element
    only (empty arrays add nothing), scalars are stringified under the
    current path (nothing when there is no path yet). Never raises.
    """
    if isinstance(value, dict):
        flattened = {}
        for key, nested in value.items():
            flattened.update(flatten(nested, join_path(prefix, key)))
        return flattened

    if isinstance(value, (list, tuple)):
        if not value:
            return {}
        return flatten(value[0], prefix)

    if not prefix:
        return {}
    return {prefix: format_scalar(value)}


def unflatten(record: FlatRecord) -> dict:
    """
    Re-nest a FlatRecord by splitting paths on the separator.

    Only an inverse of flatten() for objects whose keys contain no "_"
    and that hold no arrays.
    """
    nested = {}
    for path, value in record.items():
        parts = path.split(SEPARATOR)
        node = nested
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return nested
