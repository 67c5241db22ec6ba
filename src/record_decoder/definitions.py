"""
Definition builder.

Turns the shorthand definition forms into field definitions, once, before
any record is decoded.

Delimited definitions are sequences with one element per token::

    [
        ["place", "to_i"],
        None,                        # skip the second token
        "name",
        ["age", int],
        ["city"],
    ]

Fixed-width definitions are sequences of mappings with 1-based inclusive
columns::

    [
        {"field": "place", "start": 1, "end": 6, "cast": "int"},
        {"field": "name", "start": 45, "end": 67},
    ]
"""

from collections.abc import Mapping
from typing import Any, Iterable, Optional, Tuple

from record_decoder.aliases import canonical_cast_name
from record_decoder.casting import CallbackCast, CastRule, NamedCast
from record_decoder.exceptions import InvalidFieldDefinition
from record_decoder.models import FieldDef, IndexField, RangeField


def as_cast_rule(cast: Any) -> Optional[CastRule]:
    """Normalize a shorthand cast into a cast rule.

    Args:
        cast: None, a cast name, a callable, or an existing cast rule

    Returns:
        NamedCast, CallbackCast, or None

    Raises:
        InvalidFieldDefinition: When the cast is none of the above
    """
    if cast is None or isinstance(cast, (NamedCast, CallbackCast)):
        return cast
    if isinstance(cast, str):
        return NamedCast(canonical_cast_name(cast))
    if callable(cast):
        return CallbackCast(cast)
    raise InvalidFieldDefinition(f"Cast must be a name or a callable, got {cast!r}")


def _index_field(position: int, item: Any) -> IndexField:
    if isinstance(item, IndexField):
        return item
    if isinstance(item, FieldDef):
        raise InvalidFieldDefinition(f"Definition {position}: delimited fields must be IndexField, got {type(item).__name__}")
    if item is None:
        return IndexField(None, position)
    if isinstance(item, (list, tuple)):
        if len(item) == 1:
            return IndexField(item[0], position)
        if len(item) == 2:
            return IndexField(item[0], position, as_cast_rule(item[1]))
        raise InvalidFieldDefinition(
            f"Definition {position}: expected [name] or [name, cast], got {len(item)} elements"
        )
    if isinstance(item, Mapping):
        raise InvalidFieldDefinition(
            f"Definition {position}: mappings describe fixed-width fields, not delimited ones"
        )
    return IndexField(item, position)


def delimited_definitions(spec: Iterable[Any]) -> Tuple[IndexField, ...]:
    """Build delimited field definitions from shorthand.

    Element *i* of the shorthand describes token *i* of each record.

    Raises:
        InvalidFieldDefinition: When an element cannot be interpreted
    """
    if spec is None or isinstance(spec, (str, bytes, Mapping)):
        raise InvalidFieldDefinition(f"Definition must be a sequence of fields, got {type(spec).__name__}")
    return tuple(_index_field(position, item) for position, item in enumerate(spec))


def _range_field(position: int, item: Any) -> RangeField:
    if isinstance(item, RangeField):
        return item
    if not isinstance(item, Mapping):
        raise InvalidFieldDefinition(
            f"Definition {position}: fixed-width fields must be mappings, got {type(item).__name__}"
        )
    name_key = "field" if "field" in item else "name"
    missing = [key for key in (name_key, "start", "end") if key not in item]
    if missing:
        raise InvalidFieldDefinition(f"Definition {position}: missing {', '.join(missing)}")
    return RangeField(item[name_key], item["start"], item["end"], as_cast_rule(item.get("cast")))


def fixed_width_definitions(spec: Iterable[Any]) -> Tuple[RangeField, ...]:
    """Build fixed-width field definitions from shorthand mappings.

    Raises:
        InvalidFieldDefinition: When a mapping is incomplete or a range is invalid
    """
    if spec is None:
        raise InvalidFieldDefinition("Fixed-width decoding requires a definition")
    if isinstance(spec, (str, bytes, Mapping)):
        raise InvalidFieldDefinition(f"Definition must be a sequence of fields, got {type(spec).__name__}")
    return tuple(_range_field(position, item) for position, item in enumerate(spec))
