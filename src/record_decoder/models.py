"""
Data models for the record decoder.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from record_decoder.casting import CallbackCast, CastRule, NamedCast
from record_decoder.exceptions import InvalidFieldDefinition


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_common(name: Any, cast: Any) -> None:
    try:
        hash(name)
    except TypeError:
        raise InvalidFieldDefinition(f"Field name {name!r} is not hashable") from None
    if cast is not None and not isinstance(cast, (NamedCast, CallbackCast)):
        raise InvalidFieldDefinition(
            f"Field {name!r}: cast must be a NamedCast or CallbackCast, got {type(cast).__name__}"
        )


class FieldDef:
    """Base for field definitions: extractable, optionally castable.

    A definition whose ``name`` is None is skipped by the decoder.
    """
    name: Any
    cast: Optional[CastRule]

    @property
    def skipped(self) -> bool:
        return self.name is None

    def extract(self, record: Any) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class IndexField(FieldDef):
    """Delimited field addressed by a 0-based token index."""
    name: Any
    index: int
    cast: Optional[CastRule] = None

    def __post_init__(self):
        _check_common(self.name, self.cast)
        if not _is_int(self.index):
            raise InvalidFieldDefinition(f"Field {self.name!r}: index must be an integer, got {self.index!r}")
        if self.index < 0:
            raise InvalidFieldDefinition(f"Field {self.name!r}: index must be >= 0, got {self.index}")

    def extract(self, record: Sequence[str]) -> Optional[str]:
        """Return the raw token, or None when the record is too short."""
        if self.index >= len(record):
            return None
        return record[self.index]


@dataclass(frozen=True)
class RangeField(FieldDef):
    """Fixed-width field addressed by a 1-based inclusive column range."""
    name: Any
    start: int
    end: int
    cast: Optional[CastRule] = None

    def __post_init__(self):
        _check_common(self.name, self.cast)
        if not _is_int(self.start) or not _is_int(self.end):
            raise InvalidFieldDefinition(
                f"Field {self.name!r}: start and end must be integers, got ({self.start!r}, {self.end!r})"
            )
        if self.start < 1 or self.end < 1:
            raise InvalidFieldDefinition(
                f"Field {self.name!r}: columns are numbered from 1, got ({self.start}, {self.end})"
            )
        if self.end < self.start:
            raise InvalidFieldDefinition(
                f"Field {self.name!r}: end ({self.end}) must be >= start ({self.start})"
            )

    @property
    def slice(self) -> Tuple[int, int]:
        """0-based half-open bounds of the range."""
        return self.start - 1, self.end

    def extract(self, record: str) -> str:
        """Return the characters in range; short lines give a shorter value."""
        lo, hi = self.slice
        return record[lo:hi]


@dataclass
class LoadStats:
    """Statistics for a single bulk load."""
    total_rows: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def duration(self) -> float:
        """Get load duration in seconds."""
        end = self.end_time or time.time()
        return end - self.start_time

    @property
    def rows_per_second(self) -> float:
        """Get processing throughput."""
        duration = self.duration
        return self.total_rows / duration if duration > 0 else 0

    def finish(self) -> None:
        if self.end_time is None:
            self.end_time = time.time()
