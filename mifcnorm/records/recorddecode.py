"""Decode spreadsheet rows into RawRecord objects.

This is the single place where "is this cell empty?" gets decided. Blank
strings, whitespace, None and pandas NA/NaN all mean absent; nothing
downstream re-checks for empty-string sentinels. Present text is kept
as entered. The Exclude cell is the one exception: any non-empty string,
whitespace included, marks the row as excluded.
"""

import math
from typing import Any, Mapping, Optional

import pandas as pd

from mifcnorm.errors import DecodeError
from mifcnorm.records import recordmodels as cols
from mifcnorm.records.recordmodels import NormalizationInfo, Passthrough, RawRecord
from mifcnorm.units.unitapi import parse_unit
from mifcnorm.units.unitdefs import Unit


# ============================================================================
# Cell Helpers
# ============================================================================

def _is_missing(cell: Any) -> bool:
    """None or pandas NA/NaN."""
    if cell is None:
        return True
    if isinstance(cell, str):
        return False
    try:
        return bool(pd.isna(cell))
    except (TypeError, ValueError):
        # Array-like cells are not "missing"
        return False


def _is_absent(cell: Any) -> bool:
    if _is_missing(cell):
        return True
    return isinstance(cell, str) and not cell.strip()


def optional_text(row: Mapping[str, Any], column: str) -> Optional[str]:
    """Cell text as entered, or None when absent (blank counts as absent)."""
    cell = row.get(column)
    if _is_absent(cell):
        return None
    return str(cell)


def exclude_marker(row: Mapping[str, Any]) -> Optional[str]:
    """The Exclude cell as entered; any non-empty string counts, even whitespace."""
    cell = row.get(cols.EXCLUDE)
    if _is_missing(cell):
        return None
    marker = str(cell)
    return marker if marker != "" else None


def optional_number(row: Mapping[str, Any], column: str) -> Optional[float]:
    """Cell as float, or None when absent.

    Raises:
        DecodeError: If the cell is present but not numeric ("nan" text included)
    """
    cell = row.get(column)
    if _is_absent(cell):
        return None
    if isinstance(cell, bool):
        raise DecodeError(f"column <{column}> is not a number: {cell!r}")
    try:
        number = float(str(cell).strip()) if isinstance(cell, str) else float(cell)
    except (TypeError, ValueError):
        raise DecodeError(f"column <{column}> is not a number: {cell!r}") from None
    if math.isnan(number):
        raise DecodeError(f"column <{column}> is not a number: {cell!r}")
    return number


def optional_unit(row: Mapping[str, Any], column: str) -> Optional[Unit]:
    """Cell parsed as a Unit, or None when absent.

    Raises:
        UnknownUnitError: If the cell is present but not a known unit
    """
    text = optional_text(row, column)
    if text is None:
        return None
    return parse_unit(text)


def _required(value, column: str):
    if value is None:
        raise DecodeError(f"missing required column <{column}>")
    return value


# ============================================================================
# Row Decoding
# ============================================================================

def decode_normalization(row: Mapping[str, Any]) -> Optional[NormalizationInfo]:
    """Decode the normalization-info block, present only when all six cells are.

    Examples:
        >>> decode_normalization({"Sample Volume": "200"}) is None
        True
    """
    if any(_is_absent(row.get(c)) for c in cols.NORMALIZATION_COLUMNS):
        return None

    decoded = dict(
        sample_days=optional_number(row, cols.SAMPLE_DAYS),
        sample_hours=optional_number(row, cols.SAMPLE_HOURS),
        sample_minutes=optional_number(row, cols.SAMPLE_MINUTES),
        sample_volume=optional_number(row, cols.SAMPLE_VOLUME),
        sample_volume_unit=optional_unit(row, cols.SAMPLE_VOLUME_UNIT),
        cell_count=optional_number(row, cols.CELL_COUNT),
    )
    if any(v is None for v in decoded.values()):
        return None
    return NormalizationInfo(**decoded)


def decode_row(row: Mapping[str, Any]) -> RawRecord:
    """Decode one row (column header -> cell) into a RawRecord.

    Args:
        row: Mapping keyed by the spreadsheet column headers

    Returns:
        RawRecord with every optional field resolved to a value or None

    Raises:
        DecodeError: Required column missing, or a numeric column not numeric
        UnknownUnitError: A unit column holds unrecognized text
    """
    fields = Passthrough(
        chip_id=_required(optional_text(row, cols.CHIP_ID), cols.CHIP_ID),
        method=_required(optional_text(row, cols.METHOD), cols.METHOD),
        target=_required(optional_text(row, cols.TARGET), cols.TARGET),
        sample_location=_required(optional_text(row, cols.SAMPLE_LOCATION), cols.SAMPLE_LOCATION),
        day=_required(optional_number(row, cols.DAY), cols.DAY),
        hour=_required(optional_number(row, cols.HOUR), cols.HOUR),
        minute=_required(optional_number(row, cols.MINUTE), cols.MINUTE),
        assay_plate_id=optional_text(row, cols.ASSAY_PLATE_ID),
        assay_well_id=optional_text(row, cols.ASSAY_WELL_ID),
        subtarget=optional_text(row, cols.SUBTARGET),
        caution_flag=optional_text(row, cols.CAUTION_FLAG),
        exclude=exclude_marker(row),
        replicate=optional_number(row, cols.REPLICATE),
        cross_reference=optional_text(row, cols.CROSS_REFERENCE),
    )

    return RawRecord(
        fields=fields,
        value=optional_number(row, cols.VALUE),
        value_unit=optional_unit(row, cols.VALUE_UNIT),
        notes=optional_text(row, cols.NOTES),
        normalization=decode_normalization(row),
    )


__all__ = [
    "decode_row",
    "decode_normalization",
    "optional_text",
    "exclude_marker",
    "optional_number",
    "optional_unit",
]
