"""MIFC Normalize - SD3 measurement normalization

Public API for converting SD3 rows (MIFC measurement + normalization info)
into cell-normalized rates in ng/day/10^6 cells.

Usage:
    from mifcnorm import parse_unit, convert, Unit
    from mifcnorm import decode_row, normalize_record
    from mifcnorm import normalize_table_file

    # Category-safe unit conversion
    convert(200, parse_unit("uL"), Unit.L)  # Returns: 0.0002

    # Normalize one decoded row
    record = normalize_record(decode_row(row))

    # Normalize a whole sheet to CSV
    result = normalize_table_file("plate.xlsx", "plate-normalized.csv")
"""

__version__ = "0.1.0"

# ============================================================================
# Units API
# ============================================================================

from .units import (
    Category,          # Physical category of a unit
    Unit,              # Closed set of known units
    OUTPUT_UNIT,       # ng/day/10^6 cells
    parse_unit,        # Free-form text -> Unit
    format_unit,       # Unit -> canonical display string
    convert,           # Category-safe linear conversion
    base_unit,         # Pivot unit of a category
)

# ============================================================================
# Records API
# ============================================================================

from .records import (
    RawRecord,
    NormalizationInfo,
    NormalizedRecord,
    decode_row,               # Row mapping -> RawRecord
    normalize_record,         # RawRecord -> NormalizedRecord
    to_ng_day_million_cells,  # Bare calculation
)

# ============================================================================
# Batch API
# ============================================================================

from .batch import (
    BatchResult,
    SkippedRow,
    normalize_rows,
    normalize_frame,
    normalize_table_file,
)

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    RowError,
    DecodeError,
    Excluded,
    MissingValue,
    MissingValueUnit,
    MissingNormalizationInfo,
    UnknownUnitError,
    IncompatibleCategoryError,
    DivisionByZero,
    NonFiniteResult,
)

__all__ = [
    "__version__",

    # Units
    "Category",
    "Unit",
    "OUTPUT_UNIT",
    "parse_unit",
    "format_unit",
    "convert",
    "base_unit",

    # Records
    "RawRecord",
    "NormalizationInfo",
    "NormalizedRecord",
    "decode_row",
    "normalize_record",
    "to_ng_day_million_cells",

    # Batch
    "BatchResult",
    "SkippedRow",
    "normalize_rows",
    "normalize_frame",
    "normalize_table_file",

    # Errors
    "RowError",
    "DecodeError",
    "Excluded",
    "MissingValue",
    "MissingValueUnit",
    "MissingNormalizationInfo",
    "UnknownUnitError",
    "IncompatibleCategoryError",
    "DivisionByZero",
    "NonFiniteResult",
]
