"""
Record decoder package.

Declarative decoding of delimited and fixed-width text records.
"""

__version__ = "1.0.0"

from record_decoder.casting import NAMED_CASTS, CallbackCast, NamedCast, apply_cast, resolve_cast
from record_decoder.config_models import LoaderConfig
from record_decoder.decoder import decode_delimited, decode_fixed_width
from record_decoder.definitions import as_cast_rule, delimited_definitions, fixed_width_definitions
from record_decoder.exceptions import (
    CastExecutionError,
    InvalidFieldDefinition,
    InvalidRecord,
    RecordDecodeError,
    RecordDecoderError,
    UnknownCastOperation,
)
from record_decoder.loader import (
    load_delimited,
    load_delimited_file,
    load_delimited_gzip,
    load_fixed_width,
    load_fixed_width_file,
    load_fixed_width_gzip,
    load_from_config,
)
from record_decoder.models import FieldDef, IndexField, RangeField
from record_decoder.sources import Compression

__all__ = [
    "FieldDef",
    "IndexField",
    "RangeField",
    "NamedCast",
    "CallbackCast",
    "NAMED_CASTS",
    "resolve_cast",
    "apply_cast",
    "as_cast_rule",
    "delimited_definitions",
    "fixed_width_definitions",
    "decode_delimited",
    "decode_fixed_width",
    "load_delimited",
    "load_fixed_width",
    "load_delimited_file",
    "load_fixed_width_file",
    "load_delimited_gzip",
    "load_fixed_width_gzip",
    "load_from_config",
    "LoaderConfig",
    "Compression",
    "RecordDecoderError",
    "InvalidFieldDefinition",
    "RecordDecodeError",
    "UnknownCastOperation",
    "CastExecutionError",
    "InvalidRecord",
]
