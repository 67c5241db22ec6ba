"""
Cast rules and the cast resolver.

A cast rule turns one trimmed string value into a typed value. There are
two kinds of rule:

- NamedCast: looks up a conversion in the fixed ``NAMED_CASTS`` table.
- CallbackCast: calls a user-supplied one-argument function.

Rules are resolved lazily, so an unknown named cast only fails when a
record is decoded with it.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Optional, Union

from record_decoder.exceptions import CastExecutionError, UnknownCastOperation

logger = logging.getLogger(__name__)


def to_string(value: str) -> str:
    return value


def to_int(value: str) -> int:
    """Convert to integer, accepting decimal notation ("100.00" -> 100)."""
    return int(Decimal(value))


def to_boolean(value: str) -> bool:
    """Convert common boolean representations (true/false, yes/no, 1/0)."""
    lower_s = value.lower()
    if lower_s in ("true", "yes", "1", "t", "y"):
        return True
    if lower_s in ("false", "no", "0", "f", "n"):
        return False
    raise ValueError(f"Cannot convert '{value}' to boolean")


NAMED_CASTS = MappingProxyType({
    "string": to_string,
    "int": to_int,
    "float": float,
    "decimal": Decimal,
    "boolean": to_boolean,
})


@dataclass(frozen=True)
class NamedCast:
    """Cast by name through the ``NAMED_CASTS`` table."""
    name: str

    def resolve(self) -> Callable[[str], Any]:
        try:
            return NAMED_CASTS[self.name]
        except KeyError:
            raise UnknownCastOperation(self.name) from None


@dataclass(frozen=True)
class CallbackCast:
    """Cast through a user-supplied one-argument function."""
    fn: Callable[[str], Any]

    def resolve(self) -> Callable[[str], Any]:
        return self.fn


CastRule = Union[NamedCast, CallbackCast]


def resolve_cast(rule: Optional[CastRule]) -> Callable[[str], Any]:
    """Turn a cast rule into a callable.

    Args:
        rule: Cast rule, or None for no conversion

    Returns:
        Callable mapping the trimmed string to the output value

    Raises:
        UnknownCastOperation: When a named cast is not registered
    """
    if rule is None:
        return to_string
    return rule.resolve()


def apply_cast(rule: Optional[CastRule], value: str, field_name: Any = None) -> Any:
    """Apply a cast rule to one trimmed value.

    Args:
        rule: Cast rule, or None to return the value unchanged
        value: Trimmed string value
        field_name: Field name attached to any error raised

    Returns:
        Casted value

    Raises:
        UnknownCastOperation: When a named cast is not registered
        CastExecutionError: When the conversion raises
    """
    try:
        fn = resolve_cast(rule)
    except UnknownCastOperation as e:
        e.field_name = field_name
        raise

    try:
        return fn(value)
    except Exception as e:
        logger.debug(f"Cast of field {field_name!r} failed on {value!r}: {e}")
        raise CastExecutionError(e, value=value, field_name=field_name) from e
