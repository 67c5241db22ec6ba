"""
Short names for the decoders and loaders.

``csv_*`` names work on delimited records and ``dat_*`` names on
fixed-width records::

    from record_decoder.shortcuts import csv_file, dat_gz_file

    runners = csv_file("results.csv", [["place", "to_i"], None, "name"])
"""

from record_decoder.decoder import decode_delimited, decode_fixed_width
from record_decoder.loader import (
    load_delimited,
    load_delimited_file,
    load_delimited_gzip,
    load_fixed_width,
    load_fixed_width_file,
    load_fixed_width_gzip,
)

csv_record = decode_delimited
csv_data = load_delimited
csv_file = load_delimited_file
csv_gz_file = load_delimited_gzip

dat_record = decode_fixed_width
dat_data = load_fixed_width
dat_file = load_fixed_width_file
dat_gz_file = load_fixed_width_gzip

__all__ = [
    'csv_record',
    'csv_data',
    'csv_file',
    'csv_gz_file',
    'dat_record',
    'dat_data',
    'dat_file',
    'dat_gz_file',
]
