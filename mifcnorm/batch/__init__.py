"""Batch module: normalize whole SD3 tables row by row.

Public API:
    normalize_rows(rows) -> BatchResult
        Decode + normalize row mappings, skipping failed rows

    normalize_frame(df) -> BatchResult
        Same, over a pandas DataFrame

    normalize_table_file(input_path, output_path, sheet=None) -> BatchResult
        Read a workbook sheet or CSV and write the normalized CSV
"""

from .batchapi import (
    SkippedRow,
    BatchResult,
    normalize_rows,
    normalize_frame,
    read_table,
    normalize_table_file,
)

__all__ = [
    "SkippedRow",
    "BatchResult",
    "normalize_rows",
    "normalize_frame",
    "read_table",
    "normalize_table_file",
]
