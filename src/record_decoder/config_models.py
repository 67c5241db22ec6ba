"""
Pydantic models for load configuration.

A LoaderConfig describes a whole load (record format, field definition,
tokenizer options, encoding, compression) so that it can be kept in a JSON
file next to the data it describes. Casts in a configuration are always
named casts; callbacks are only available programmatically.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

from record_decoder.definitions import as_cast_rule
from record_decoder.models import IndexField, RangeField
from record_decoder.sources import Compression


class FormatType(str, Enum):
    """Supported record formats."""
    CSV = "csv"
    FIXED_WIDTH = "fixed_width"


class DelimitedFieldConfig(BaseModel):
    """Delimited field definition."""
    name: Optional[Any] = Field(None, description="Output key; null skips the token")
    cast: Optional[str] = Field(None, description="Named cast applied to the trimmed value")
    index: Optional[int] = Field(None, description="Token index (defaults to the field's position)", ge=0)

    model_config = {"extra": "forbid"}

    def to_field(self, position: int) -> IndexField:
        index = position if self.index is None else self.index
        return IndexField(self.name, index, as_cast_rule(self.cast))


class FixedWidthFieldConfig(BaseModel):
    """Fixed-width field definition with 1-based inclusive columns."""
    name: Optional[Any] = Field(..., alias="field", description="Output key; null skips the field")
    start: int = Field(..., description="First column (1-based, inclusive)")
    end: int = Field(..., description="Last column (1-based, inclusive)")
    cast: Optional[str] = Field(None, description="Named cast applied to the trimmed value")

    model_config = {"populate_by_name": True}

    @model_validator(mode='after')
    def validate_range(self):
        """Check the column range using the same rules as RangeField."""
        self.to_field()
        return self

    def to_field(self) -> RangeField:
        return RangeField(self.name, self.start, self.end, as_cast_rule(self.cast))


class CsvOptions(BaseModel):
    """Options forwarded to the CSV tokenizer."""
    delimiter: str = Field(",", description="CSV delimiter character", min_length=1, max_length=1)
    quotechar: str = Field('"', description="CSV quote character", min_length=1, max_length=1)
    escapechar: Optional[str] = Field(None, description="CSV escape character", min_length=1, max_length=1)
    doublequote: bool = Field(True, description="CSV double quote handling")
    skipinitialspace: bool = Field(False, description="Ignore whitespace after the delimiter")
    strict: bool = Field(False, description="Raise on malformed CSV input")

    def reader_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``csv.reader``."""
        options = self.model_dump(exclude_none=True)
        if self.escapechar is not None:
            options['doublequote'] = False
        return options


class LoaderConfig(BaseModel):
    """Configuration for one load."""
    format_type: FormatType = Field(..., description="Record format")
    definition: Optional[List[Union[DelimitedFieldConfig, FixedWidthFieldConfig, None]]] = Field(
        None,
        description="Field definitions; omit for raw token lists (csv only)"
    )
    csv: CsvOptions = Field(default_factory=CsvOptions, description="CSV tokenizer options")
    encoding: str = Field("utf-8", description="Source text encoding")
    compression: Compression = Field(Compression.AUTO, description="Source compression")
    skip_rows: int = Field(0, description="Number of lines to skip at start", ge=0)
    progress_interval: int = Field(10000, description="Log progress every N records", gt=0)

    @model_validator(mode='before')
    @classmethod
    def parse_definition(cls, data: Any) -> Any:
        """Pick the field model matching the format so unions resolve predictably."""
        if not isinstance(data, dict) or data.get("definition") is None:
            return data
        fmt = data.get("format_type")
        fmt = fmt.value if isinstance(fmt, FormatType) else fmt
        model = FixedWidthFieldConfig if fmt == FormatType.FIXED_WIDTH.value else DelimitedFieldConfig
        parsed = []
        for item in data["definition"]:
            if item is None or isinstance(item, BaseModel):
                parsed.append(item)
            elif model is DelimitedFieldConfig and isinstance(item, str):
                parsed.append(model(name=item))
            elif model is DelimitedFieldConfig and isinstance(item, list) and 1 <= len(item) <= 2:
                parsed.append(model(name=item[0], cast=item[1] if len(item) == 2 else None))
            else:
                parsed.append(model.model_validate(item))
        return {**data, "definition": parsed}

    @model_validator(mode='after')
    def validate_format_specific_requirements(self):
        """Validate format-specific requirements."""
        if self.format_type == FormatType.FIXED_WIDTH:
            if self.definition is None:
                raise ValueError("Fixed-width loads require a 'definition'")
            for item in self.definition:
                if not isinstance(item, FixedWidthFieldConfig):
                    raise ValueError("Fixed-width definitions must have 'field', 'start' and 'end'")
        return self

    def build_definitions(self) -> Optional[Tuple[Union[IndexField, RangeField], ...]]:
        """Build the field definitions described by this configuration."""
        if self.definition is None:
            return None
        if self.format_type == FormatType.FIXED_WIDTH:
            return tuple(item.to_field() for item in self.definition)
        return tuple(
            IndexField(None, position) if item is None else item.to_field(position)
            for position, item in enumerate(self.definition)
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LoaderConfig":
        """
        Create LoaderConfig from a dictionary.

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: Union[str, Path]) -> "LoaderConfig":
        """
        Load and validate configuration from a JSON file.

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)
