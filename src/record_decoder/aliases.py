"""
Alternative names for the named casts.

The cast resolver only knows the canonical names in ``NAMED_CASTS``. The
definition builder maps these aliases onto them before a NamedCast is
created. Unknown names pass through untouched and fail when decoded.
"""

from typing import Dict

CAST_ALIASES: Dict[str, str] = {
    "to_i": "int",
    "integer": "int",
    "to_f": "float",
    "to_s": "string",
    "str": "string",
    "to_d": "decimal",
    "number": "decimal",
    "bool": "boolean",
}


def canonical_cast_name(name: str) -> str:
    """Return the canonical cast name for an alias (case-insensitive)."""
    key = name.strip().lower()
    return CAST_ALIASES.get(key, key)
