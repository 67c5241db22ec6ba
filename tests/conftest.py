"""Pytest configuration and shared fixtures."""

import bz2
import gzip
from pathlib import Path

import pytest

RACE_ROWS = [
    ("1", "M", "Alice Smith", "34", "0:35:12"),
    ("2", "F", "Bob Jones", "41", "0:36:05"),
    ("3", "M", "Carol White", "29", "0:36:47"),
    ("4", "F", "Dan Brown", "52", "0:38:30"),
    ("5", "M", "Eve Black", "38", "0:39:02"),
]


def _fixed_width_line(place, div, name, age, time):
    # columns: place 1-4, div 5-6, name 7-22, age 23-25, time 26-33
    return f"{place:>4}{div:>2}{name:<16}{age:>3}{time:>8}"


@pytest.fixture
def race_csv_text() -> str:
    """Delimited race results, with padding around some values."""
    return "".join(f"{place}, {div},{name} ,{age},{time}\n" for place, div, name, age, time in RACE_ROWS)


@pytest.fixture
def race_fixed_width_text() -> str:
    """Fixed-width race results."""
    return "".join(_fixed_width_line(*row) + "\n" for row in RACE_ROWS)


@pytest.fixture
def race_csv_definition() -> list:
    """Delimited shorthand definition for the race results."""
    return [
        ["place", "to_i"],
        None,
        "name",
        ["age", int],
        ["time"],
    ]


@pytest.fixture
def race_fixed_width_definition() -> list:
    """Fixed-width shorthand definition for the race results."""
    return [
        {"field": "place", "start": 1, "end": 4, "cast": "int"},
        {"field": "name", "start": 7, "end": 22},
        {"field": "age", "start": 23, "end": 25, "cast": "to_i"},
        {"field": "time", "start": 26, "end": 33},
    ]


@pytest.fixture
def write_sources(tmp_path):
    """Write text to a plain, a gzip and a bzip2 file and return the paths."""
    def _write(text: str, stem: str = "data"):
        plain = tmp_path / f"{stem}.txt"
        plain.write_text(text, encoding="utf-8", newline="")
        gz_path = tmp_path / f"{stem}.txt.gz"
        with gzip.open(gz_path, "wt", encoding="utf-8", newline="") as f:
            f.write(text)
        bz2_path = tmp_path / f"{stem}.txt.bz2"
        with bz2.open(bz2_path, "wt", encoding="utf-8", newline="") as f:
            f.write(text)
        return plain, gz_path, bz2_path
    return _write


@pytest.fixture
def race_csv_file(tmp_path, race_csv_text) -> Path:
    """Create a delimited race results file."""
    csv_file = tmp_path / "race.csv"
    csv_file.write_text(race_csv_text, encoding="utf-8")
    return csv_file


@pytest.fixture
def race_fixed_width_gzip(tmp_path, race_fixed_width_text) -> Path:
    """Create a gzip-compressed fixed-width race results file."""
    gz_file = tmp_path / "race.dat.gz"
    with gzip.open(gz_file, "wt", encoding="utf-8") as f:
        f.write(race_fixed_width_text)
    return gz_file
