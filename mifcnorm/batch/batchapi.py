"""Batch normalization of SD3 tables.

Each row is decoded and normalized on its own. A row that fails for any
RowError reason is logged with its spreadsheet row number and skipped; the
batch always runs to the end.

Row numbers are 1-based spreadsheet lines: the header is line 1, so the
first data row is line 2.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from mifcnorm.errors import Excluded, RowError
from mifcnorm.records.recorddecode import decode_row, exclude_marker
from mifcnorm.records.recordmodels import MIFC_COLUMNS, NormalizedRecord
from mifcnorm.records.recordnormalize import normalize_record

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


# ============================================================================
# Results
# ============================================================================

@dataclass(frozen=True)
class SkippedRow:
    """A row left out of the output, and why."""

    row_number: int
    kind: str
    message: str


@dataclass
class BatchResult:
    """Normalized records plus the rows that were skipped."""

    normalized: List[NormalizedRecord] = field(default_factory=list)
    skipped: List[SkippedRow] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.normalized) + len(self.skipped)

    def to_frame(self) -> pd.DataFrame:
        """Normalized records as a DataFrame with the MIFC column set."""
        return pd.DataFrame([r.to_row() for r in self.normalized], columns=MIFC_COLUMNS)

    def skipped_frame(self) -> pd.DataFrame:
        """Skip report: one line per skipped row."""
        return pd.DataFrame(
            [(s.row_number, s.kind, s.message) for s in self.skipped],
            columns=["row", "kind", "message"],
        )


# ============================================================================
# Row Processing
# ============================================================================

def _process_row(row: Mapping[str, Any]) -> NormalizedRecord:
    # Exclusion wins over any other problem in the row
    marker = exclude_marker(row)
    if marker is not None:
        raise Excluded(marker)
    return normalize_record(decode_row(row))


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    first_row_number: int = 2,
    label: str = "table",
) -> BatchResult:
    """Decode and normalize rows, skipping (and logging) failures.

    Args:
        rows: Row mappings keyed by column header
        first_row_number: Spreadsheet line number of the first row
        label: Name used in log messages (sheet or file name)

    Returns:
        BatchResult with normalized records and skipped rows, in input order
    """
    result = BatchResult()

    for i, row in enumerate(rows):
        row_number = first_row_number + i
        try:
            result.normalized.append(_process_row(row))
        except RowError as e:
            logger.info(f"did not normalize row {row_number} in {label} ({e.kind}): {e}")
            result.skipped.append(SkippedRow(row_number, e.kind, str(e)))

    logger.info(
        f"{label}: normalized {len(result.normalized)}/{result.total} rows, "
        f"skipped {len(result.skipped)}"
    )
    return result


def normalize_frame(df: pd.DataFrame, *, label: str = "table") -> BatchResult:
    """Normalize every row of a DataFrame whose columns are SD3 headers."""
    return normalize_rows(df.to_dict(orient="records"), label=label)


# ============================================================================
# File I/O
# ============================================================================

def read_table(path: Union[str, Path], sheet: Optional[Union[str, int]] = None) -> pd.DataFrame:
    """Read one SD3 sheet (Excel) or CSV file with every cell as text.

    Args:
        path: .xlsx/.xlsm/.xls workbook or .csv file
        sheet: Sheet name or index for workbooks (default: first sheet)

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If the file type is not supported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input table not found: {path}")

    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=0 if sheet is None else sheet, dtype=str)
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype=str)
    else:
        raise ValueError(f"Unsupported file type: {path}")

    df.columns = [str(c).strip() for c in df.columns]
    logger.info(f"Loaded {len(df)} rows from {path}")
    return df


def normalize_table_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    *,
    sheet: Optional[Union[str, int]] = None,
) -> BatchResult:
    """Normalize one sheet or CSV file and write the normalized CSV.

    Args:
        input_path: Workbook or CSV holding SD3 rows
        output_path: Where to write the normalized MIFC CSV (overwritten)
        sheet: Sheet name or index for workbooks (default: first sheet)

    Returns:
        BatchResult for the processed rows
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    df = read_table(input_path, sheet=sheet)
    label = input_path.name if sheet is None else f"{input_path.name}[{sheet}]"
    result = normalize_frame(df, label=label)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    result.to_frame().to_csv(output_path, index=False)
    logger.info(f"Wrote {len(result.normalized)} normalized rows to {output_path}")
    return result


__all__ = [
    "SkippedRow",
    "BatchResult",
    "normalize_rows",
    "normalize_frame",
    "read_table",
    "normalize_table_file",
]
