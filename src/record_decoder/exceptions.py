"""
Exception hierarchy for the record decoder.

Definition errors are raised when a field definition is built, before any
source is opened. Decode errors are raised while a record is being decoded
and carry the field name and, inside a bulk load, the 0-based index of the
record that failed.
"""

from typing import Any, Optional


class RecordDecoderError(Exception):
    """Base exception for all record decoder errors."""


class InvalidFieldDefinition(RecordDecoderError, ValueError):
    """Raised when a field definition is malformed.

    For example a character range with ``end < start``, a bound below 1,
    or a negative token index.
    """


class RecordDecodeError(RecordDecoderError):
    """Base class for errors raised while decoding a record."""

    def __init__(self, message: str, field_name: Any = None,
                 record_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.field_name = field_name
        self.record_index = record_index

    def __str__(self) -> str:
        parts = [self.message]
        if self.field_name is not None:
            parts.append(f"field={self.field_name!r}")
        if self.record_index is not None:
            parts.append(f"record={self.record_index}")
        if len(parts) == 1:
            return self.message
        return f"{parts[0]} ({', '.join(parts[1:])})"


class UnknownCastOperation(RecordDecodeError):
    """Raised when a named cast has no registered conversion."""

    def __init__(self, cast_name: str, field_name: Any = None,
                 record_index: Optional[int] = None):
        super().__init__(f"Unknown cast operation '{cast_name}'", field_name, record_index)
        self.cast_name = cast_name


class CastExecutionError(RecordDecodeError):
    """Raised when a cast conversion fails.

    The original exception is kept in ``original`` and chained as
    ``__cause__``.
    """

    def __init__(self, original: BaseException, value: Optional[str] = None,
                 field_name: Any = None, record_index: Optional[int] = None):
        message = f"Failed to cast {value!r}: {type(original).__name__}: {original}"
        super().__init__(message, field_name, record_index)
        self.original = original
        self.value = value


class InvalidRecord(RecordDecodeError):
    """Raised when a raw record cannot be indexed or tokenized."""
