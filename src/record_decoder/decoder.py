"""
Record decoder.

Decodes one raw record into a structured record:

- decode_delimited: a sequence of tokens (or one CSV line), fields addressed
  by token index.
- decode_fixed_width: one line, fields addressed by 1-based inclusive
  column ranges.

Every extracted value is trimmed of surrounding whitespace before its cast
is applied. When a field name is repeated in a definition, the last value
wins and the key keeps its first position.
"""

import csv
import io
from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict, List, Optional, Tuple, Union

from record_decoder.casting import apply_cast
from record_decoder.definitions import delimited_definitions, fixed_width_definitions
from record_decoder.exceptions import InvalidFieldDefinition, InvalidRecord
from record_decoder.models import IndexField, RangeField

StructuredRecord = Union[Dict[Any, Any], List[str]]


def tokenize_line(line: str, **csv_options) -> List[str]:
    """Tokenize delimited text, returning its first row.

    Later rows are ignored. A quoted field may span lines.

    Raises:
        InvalidRecord: When the tokenizer rejects the line
    """
    try:
        return next(csv.reader(io.StringIO(line, newline=""), **csv_options), [])
    except csv.Error as e:
        raise InvalidRecord(f"Cannot tokenize record: {e}") from e


def _check_tokens(tokens: Any) -> None:
    if (not isinstance(tokens, Sequence) or isinstance(tokens, (bytes, bytearray))
            or isinstance(tokens, (Mapping, Set))):
        raise InvalidRecord(f"Delimited record must be a sequence of strings, got {type(tokens).__name__}")


def _trim(token: Any, field_name: Any = None) -> str:
    if not isinstance(token, str):
        raise InvalidRecord(f"Token must be a string, got {type(token).__name__}", field_name)
    return token.strip()


def decode_delimited_tokens(tokens: Sequence[str],
                            definitions: Optional[Tuple[IndexField, ...]]) -> StructuredRecord:
    """Decode already tokenized values with normalized definitions.

    This is the per-record step used by the bulk loaders, which normalize
    the definition once per load.
    """
    _check_tokens(tokens)

    if definitions is None:
        return [_trim(token) for token in tokens]

    record: Dict[Any, Any] = {}
    for definition in definitions:
        if definition.skipped:
            continue
        raw = definition.extract(tokens)
        if raw is None:
            continue
        record[definition.name] = apply_cast(definition.cast, _trim(raw, definition.name), definition.name)
    return record


def decode_delimited(tokens: Union[str, Sequence[str]], definitions: Any = None,
                     **csv_options) -> StructuredRecord:
    """Decode one delimited record.

    Args:
        tokens: Sequence of string tokens, or a line of delimited text which
            is tokenized with ``csv.reader`` (first row only)
        definitions: Field definitions or delimited shorthand; None returns
            the trimmed tokens as a list
        **csv_options: Options forwarded to ``csv.reader`` when tokens is text

    Returns:
        Dict keyed by field name, or a list of trimmed tokens

    Raises:
        InvalidFieldDefinition: When the definition is malformed
        InvalidRecord: When tokens cannot be indexed
        UnknownCastOperation: When a named cast is not registered
        CastExecutionError: When a cast raises
    """
    normalized = None if definitions is None else delimited_definitions(definitions)
    if isinstance(tokens, str):
        tokens = tokenize_line(tokens, **csv_options)
    return decode_delimited_tokens(tokens, normalized)


def decode_fixed_width_line(line: str, definitions: Tuple[RangeField, ...]) -> Dict[Any, Any]:
    """Decode one fixed-width line with normalized definitions."""
    if not isinstance(line, str):
        raise InvalidRecord(f"Fixed-width record must be a string, got {type(line).__name__}")

    record: Dict[Any, Any] = {}
    for definition in definitions:
        if not isinstance(definition, RangeField):
            raise InvalidFieldDefinition(
                f"Fixed-width decoding requires RangeField definitions, got {type(definition).__name__}"
            )
        if definition.skipped:
            continue
        value = definition.extract(line).strip()
        record[definition.name] = apply_cast(definition.cast, value, definition.name)
    return record


def decode_fixed_width(line: str, definitions: Any) -> Dict[Any, Any]:
    """Decode one fixed-width record.

    Columns are numbered from 1 and ranges are inclusive. A line shorter
    than a range yields the characters that are present, possibly an empty
    string.

    Args:
        line: Raw record text
        definitions: RangeField definitions or fixed-width shorthand mappings

    Returns:
        Dict keyed by field name

    Raises:
        InvalidFieldDefinition: When the definition is missing or malformed
        InvalidRecord: When line is not a string
        UnknownCastOperation: When a named cast is not registered
        CastExecutionError: When a cast raises
    """
    return decode_fixed_width_line(line, fixed_width_definitions(definitions))
