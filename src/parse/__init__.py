"""Parsing utilities for modgraph."""

from parse.typescript import (
    extract_file_record,
    extract_file_record_from_source,
    extract_file_records,
)

__all__ = [
    "extract_file_record",
    "extract_file_record_from_source",
    "extract_file_records",
]
