"""
Bulk loaders.

Each loader turns a textual source into a list of structured records, one
per raw record, in source order. In-memory text, plain files and compressed
files all go through the same stream handling, so the same content decodes
to the same records whatever the source.

The first record that fails aborts the whole load: nothing is returned, and
the error is raised with ``record_index`` set to the 0-based index of the
offending record. I/O and decompression errors keep their type and message
and carry the same index in a ``record_index`` attribute.
"""

import csv
import logging
import zlib
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any, Callable, Iterable, List, Optional, Tuple, Union

from record_decoder.config_models import FormatType, LoaderConfig
from record_decoder.decoder import StructuredRecord, decode_delimited_tokens, decode_fixed_width_line
from record_decoder.definitions import delimited_definitions, fixed_width_definitions
from record_decoder.exceptions import InvalidRecord, RecordDecodeError
from record_decoder.models import IndexField, LoadStats, RangeField
from record_decoder.sources import Compression, PathLike, open_text_source, skip_lines, text_stream

logger = logging.getLogger(__name__)

SOURCE_ERRORS = (OSError, EOFError, zlib.error, UnicodeDecodeError)

DEFAULT_PROGRESS_INTERVAL = 10000


def _collect(raw_records: Iterable[Any], decode_one: Callable[[Any], StructuredRecord],
             source_name: str, progress_interval: int = DEFAULT_PROGRESS_INTERVAL) -> List[StructuredRecord]:
    """Decode every raw record, aborting on the first failure.

    The index of a failing record is the number of records decoded before it.
    """
    stats = LoadStats()
    records: List[StructuredRecord] = []

    try:
        for raw in raw_records:
            records.append(decode_one(raw))
            if progress_interval > 0 and len(records) % progress_interval == 0:
                logger.debug(f"[{source_name}] Decoded {len(records):,} records")
    except RecordDecodeError as e:
        e.record_index = len(records)
        logger.error(f"[{source_name}] Failed to decode record {len(records)}: {e}")
        raise
    except csv.Error as e:
        logger.error(f"[{source_name}] Failed to tokenize record {len(records)}: {e}")
        raise InvalidRecord(f"Cannot tokenize record: {e}", record_index=len(records)) from e
    except SOURCE_ERRORS as e:
        logger.error(f"[{source_name}] Failed reading record {len(records)}: {type(e).__name__}: {e}")
        e.record_index = len(records)
        if hasattr(e, "add_note"):
            e.add_note(f"while reading record {len(records)} of {source_name}")
        raise

    stats.total_rows = len(records)
    stats.finish()
    logger.info(
        f"[{source_name}] Decoded {stats.total_rows:,} records in {stats.duration:.2f}s "
        f"({stats.rows_per_second:.0f} records/sec)"
    )
    return records


def _delimited_decoder(definitions: Optional[Tuple[IndexField, ...]]) -> Callable[[List[str]], StructuredRecord]:
    return lambda tokens: decode_delimited_tokens(tokens, definitions)


def _fixed_width_decoder(definitions: Tuple[RangeField, ...]) -> Callable[[str], StructuredRecord]:
    return lambda line: decode_fixed_width_line(line, definitions)


def _normalize_delimited(definitions: Any) -> Optional[Tuple[IndexField, ...]]:
    return None if definitions is None else delimited_definitions(definitions)


def _load_delimited_stream(stream: IO[str], definitions: Optional[Tuple[IndexField, ...]],
                           source_name: str, progress_interval: int,
                           csv_options: dict) -> List[StructuredRecord]:
    reader = csv.reader(stream, **csv_options)
    return _collect(reader, _delimited_decoder(definitions), source_name, progress_interval)


def _load_fixed_width_stream(stream: IO[str], definitions: Tuple[RangeField, ...],
                             source_name: str, progress_interval: int) -> List[StructuredRecord]:
    return _collect(stream, _fixed_width_decoder(definitions), source_name, progress_interval)


def load_delimited(data: str, definitions: Any = None, **csv_options) -> List[StructuredRecord]:
    """Decode in-memory delimited text.

    Args:
        data: Delimited text, one or more records
        definitions: Field definitions or delimited shorthand; None gives
            lists of trimmed tokens
        **csv_options: Options forwarded to ``csv.reader``

    Returns:
        One structured record per CSV row, in order
    """
    normalized = _normalize_delimited(definitions)
    return _load_delimited_stream(text_stream(data), normalized, "<string>",
                                  DEFAULT_PROGRESS_INTERVAL, csv_options)


def load_fixed_width(data: str, definitions: Any) -> List[StructuredRecord]:
    """Decode in-memory fixed-width text, one record per line.

    Args:
        data: Fixed-width text
        definitions: RangeField definitions or fixed-width shorthand mappings

    Returns:
        One dict per line, in order
    """
    normalized = fixed_width_definitions(definitions)
    return _load_fixed_width_stream(text_stream(data), normalized, "<string>", DEFAULT_PROGRESS_INTERVAL)


def load_delimited_file(path: PathLike, definitions: Any = None, encoding: str = "utf-8",
                        compression: Union[Compression, str] = Compression.AUTO, skip_rows: int = 0,
                        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
                        **csv_options) -> List[StructuredRecord]:
    """Decode a plain or compressed delimited file.

    Args:
        path: Path to the file
        definitions: Field definitions or delimited shorthand
        encoding: Text encoding of the (decompressed) content
        compression: AUTO (sniff magic bytes), NONE, GZIP or BZ2
        skip_rows: Number of leading lines to skip, e.g. a header
        progress_interval: Log progress every N records
        **csv_options: Options forwarded to ``csv.reader``

    Returns:
        One structured record per CSV row, in order

    Raises:
        OSError: If the file cannot be opened, read or decompressed
    """
    normalized = _normalize_delimited(definitions)
    source_name = Path(path).name
    logger.info(f"Loading delimited records from {path}")

    with open_text_source(path, compression, encoding) as stream:
        skip_lines(stream, skip_rows)
        return _load_delimited_stream(stream, normalized, source_name, progress_interval, csv_options)


def load_fixed_width_file(path: PathLike, definitions: Any, encoding: str = "utf-8",
                          compression: Union[Compression, str] = Compression.AUTO, skip_rows: int = 0,
                          progress_interval: int = DEFAULT_PROGRESS_INTERVAL) -> List[StructuredRecord]:
    """Decode a plain or compressed fixed-width file, one record per line.

    Args:
        path: Path to the file
        definitions: RangeField definitions or fixed-width shorthand mappings
        encoding: Text encoding of the (decompressed) content
        compression: AUTO (sniff magic bytes), NONE, GZIP or BZ2
        skip_rows: Number of leading lines to skip
        progress_interval: Log progress every N records

    Returns:
        One dict per line, in order

    Raises:
        OSError: If the file cannot be opened, read or decompressed
    """
    normalized = fixed_width_definitions(definitions)
    source_name = Path(path).name
    logger.info(f"Loading fixed-width records from {path}")

    with open_text_source(path, compression, encoding) as stream:
        skip_lines(stream, skip_rows)
        return _load_fixed_width_stream(stream, normalized, source_name, progress_interval)


def load_delimited_gzip(path: PathLike, definitions: Any = None, encoding: str = "utf-8",
                        **csv_options) -> List[StructuredRecord]:
    """Decode a gzip-compressed delimited file."""
    return load_delimited_file(path, definitions, encoding=encoding,
                               compression=Compression.GZIP, **csv_options)


def load_fixed_width_gzip(path: PathLike, definitions: Any,
                          encoding: str = "utf-8") -> List[StructuredRecord]:
    """Decode a gzip-compressed fixed-width file."""
    return load_fixed_width_file(path, definitions, encoding=encoding, compression=Compression.GZIP)


def load_from_config(config: Union[LoaderConfig, Mapping, PathLike], path: PathLike) -> List[StructuredRecord]:
    """Decode a file as described by a load configuration.

    Args:
        config: LoaderConfig, a configuration dict, or a path to a JSON
            configuration file
        path: Path to the data file

    Returns:
        One structured record per raw record, in order

    Raises:
        ValidationError: If the configuration is invalid
        FileNotFoundError: If the configuration or data file doesn't exist
    """
    if isinstance(config, Mapping):
        config = LoaderConfig.from_dict(dict(config))
    elif not isinstance(config, LoaderConfig):
        logger.info(f"Loading configuration from {config}")
        config = LoaderConfig.from_json_file(config)

    definitions = config.build_definitions()
    logger.info(f"Format: {config.format_type.value}, Compression: {config.compression.value}")

    if config.format_type == FormatType.FIXED_WIDTH:
        return load_fixed_width_file(path, definitions, encoding=config.encoding,
                                     compression=config.compression, skip_rows=config.skip_rows,
                                     progress_interval=config.progress_interval)
    return load_delimited_file(path, definitions, encoding=config.encoding,
                               compression=config.compression, skip_rows=config.skip_rows,
                               progress_interval=config.progress_interval,
                               **config.csv.reader_options())
