"""Normalize raw SD3 records to ng/day/10^6 cells.

Conversion Formula:
    ng/day/10^6 cells = (conc[g/L] * volume[L] -> ng) / days / cells * 10^6

Example Calculation:
    Input: 153.914 ng/mL, 200 µL sample, 1 day, 16768 cells
    Step 1: conc = 153.914e-6 g/L, volume = 2e-4 L
    Step 2: produced = 3.07828e-8 g = 30.7828 ng
    Step 3: 30.7828 ng / 1 day / 16768 cells = 0.0018358 ng/day/cell
    Step 4: * 10^6 = 1835.80 ng/day/10^6 cells

Pure functions only: no I/O and no state shared between records.
"""

import logging
import math
from typing import Optional

from mifcnorm.errors import (
    DivisionByZero,
    Excluded,
    MissingNormalizationInfo,
    MissingValue,
    MissingValueUnit,
    NonFiniteResult,
)
from mifcnorm.records.recordmodels import NormalizationInfo, NormalizedRecord, RawRecord
from mifcnorm.units.unitapi import convert, format_unit
from mifcnorm.units.unitdefs import OUTPUT_UNIT, Unit

logger = logging.getLogger(__name__)

CELLS_PER_NORMALIZED_UNIT = 1_000_000.0
NOTE_SEPARATOR = " || "


# ============================================================================
# Calculation
# ============================================================================

def to_ng_day_million_cells(value: float, value_unit: Unit, info: NormalizationInfo) -> float:
    """Convert a concentration into nanograms per day per million cells.

    Args:
        value: Measured concentration
        value_unit: Concentration unit of the measurement
        info: Sample duration, volume and cell count

    Returns:
        Finite normalized value

    Raises:
        IncompatibleCategoryError: value_unit is not a concentration, or the
            sample volume unit is not a volume
        DivisionByZero: Sample duration or cell count is zero
        NonFiniteResult: Any other inf/NaN outcome
    """
    days = info.sample_time_days()
    si_val = convert(value, value_unit, Unit.G_L)
    si_vol = convert(info.sample_volume, info.sample_volume_unit, Unit.L)
    logger.debug(f"conc: {value:.5f} {value_unit} to SI {si_val:.5g} {Unit.G_L}")
    logger.debug(f"vol: {info.sample_volume:.5f} {info.sample_volume_unit} to SI {si_vol:.5g} {Unit.L}")

    produced_ng = convert(si_val * si_vol, Unit.G, Unit.NG)
    logger.debug(f"produced ng: {produced_ng:.5f} over {days:.3f} day(s)")

    if days == 0:
        raise DivisionByZero("sample collection duration is zero days")
    if info.cell_count == 0:
        raise DivisionByZero("estimated cell number is zero")

    normalized = produced_ng / days / info.cell_count * CELLS_PER_NORMALIZED_UNIT
    if not math.isfinite(normalized):
        raise NonFiniteResult(f"normalization produced a non-finite value ({normalized})")
    return normalized


# ============================================================================
# Provenance Note
# ============================================================================

def _format_number(x: float) -> str:
    """Shortest readable form: integral floats without a trailing .0."""
    if float(x).is_integer():
        return str(int(x))
    return repr(float(x))


def build_provenance_note(value: float, value_unit: Unit, info: NormalizationInfo) -> str:
    """Sentence recording the original measurement and normalization inputs.

    Examples:
        >>> info = NormalizationInfo(1.0, 0.0, 0.0, 200.0, Unit.UL, 16768.0)
        >>> build_provenance_note(153.914, Unit.NG_ML, info)
        'Normalized from 153.9140 ng/mL by a 200 µL sample over 1 day with an estimated 16768 cells'
    """
    days = info.sample_time_days()
    return (
        f"Normalized from {value:.4f} {format_unit(value_unit)} "
        f"by a {_format_number(info.sample_volume)} {format_unit(info.sample_volume_unit)} sample "
        f"over {_format_number(days)} {'days' if days > 1.0 else 'day'} "
        f"with an estimated {_format_number(info.cell_count)} cells"
    )


def append_note(notes: Optional[str], note: str) -> str:
    """Append a note to existing notes with the ' || ' separator."""
    if notes:
        return f"{notes}{NOTE_SEPARATOR}{note}"
    return note


# ============================================================================
# Record Normalization
# ============================================================================

def normalize_record(raw: RawRecord) -> NormalizedRecord:
    """Normalize one raw record, or raise the first failure found.

    Checks run in order and short-circuit: exclusion, missing value,
    missing value unit, missing normalization info, then the calculation.

    Args:
        raw: Decoded input row

    Returns:
        NormalizedRecord with value in ng/day/10^6 cells and the provenance
        note appended to notes; all other fields unchanged

    Raises:
        Excluded, MissingValue, MissingValueUnit, MissingNormalizationInfo,
        IncompatibleCategoryError, DivisionByZero, NonFiniteResult
    """
    if raw.fields.exclude:
        raise Excluded(raw.fields.exclude)
    if raw.value is None:
        raise MissingValue()
    if raw.value_unit is None:
        raise MissingValueUnit()
    info = raw.normalization
    if info is None:
        raise MissingNormalizationInfo()

    normalized = to_ng_day_million_cells(raw.value, raw.value_unit, info)
    note = build_provenance_note(raw.value, raw.value_unit, info)

    return NormalizedRecord(
        fields=raw.fields,
        value=normalized,
        value_unit=OUTPUT_UNIT,
        notes=append_note(raw.notes, note),
    )


__all__ = [
    "normalize_record",
    "to_ng_day_million_cells",
    "build_provenance_note",
    "append_note",
]
