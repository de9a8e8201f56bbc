"""Record types for SD3 rows (MIFC measurement + normalization info).

Column header strings are fixed; they must match existing spreadsheets
exactly for input decoding and for the normalized CSV output.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from mifcnorm.units.unitapi import format_unit
from mifcnorm.units.unitdefs import OUTPUT_UNIT, Unit


# ============================================================================
# Column Headers
# ============================================================================

CHIP_ID = "Chip ID"
ASSAY_PLATE_ID = "Assay Plate ID"
ASSAY_WELL_ID = "Assay Well ID"
METHOD = "Method/Kit"
TARGET = "Target/Analyte"
SUBTARGET = "Subtarget"
SAMPLE_LOCATION = "Sample Location"
DAY = "Day"
HOUR = "Hour"
MINUTE = "Minute"
VALUE = "Value"
VALUE_UNIT = "Value Unit"
CAUTION_FLAG = "Caution Flag"
EXCLUDE = "Exclude"
NOTES = "Notes"
REPLICATE = "Replicate"
CROSS_REFERENCE = "Cross Reference"

SAMPLE_DAYS = "Duration Sample Collection (days)"
SAMPLE_HOURS = "Duration Sample Collection (hours)"
SAMPLE_MINUTES = "Duration Sample Collection (minutes)"
SAMPLE_VOLUME = "Sample Volume"
SAMPLE_VOLUME_UNIT = "Sample Volume Unit"
CELL_COUNT = "Estimated Cell Number"

# Output column order (MIFC format)
MIFC_COLUMNS = [
    CHIP_ID,
    ASSAY_PLATE_ID,
    ASSAY_WELL_ID,
    METHOD,
    TARGET,
    SUBTARGET,
    SAMPLE_LOCATION,
    DAY,
    HOUR,
    MINUTE,
    VALUE,
    VALUE_UNIT,
    CAUTION_FLAG,
    EXCLUDE,
    NOTES,
    REPLICATE,
    CROSS_REFERENCE,
]

NORMALIZATION_COLUMNS = [
    SAMPLE_DAYS,
    SAMPLE_HOURS,
    SAMPLE_MINUTES,
    SAMPLE_VOLUME,
    SAMPLE_VOLUME_UNIT,
    CELL_COUNT,
]


# ============================================================================
# Records
# ============================================================================

@dataclass(frozen=True)
class NormalizationInfo:
    """Sample-collection metadata needed to normalize one measurement."""

    sample_days: float
    sample_hours: float
    sample_minutes: float
    sample_volume: float
    sample_volume_unit: Unit
    cell_count: float

    def sample_time_days(self) -> float:
        """Duration of the sample collection in days."""
        return (
            self.sample_days
            + self.sample_hours / 24.0
            + self.sample_minutes / (24.0 * 60.0)
        )


@dataclass(frozen=True)
class Passthrough:
    """Identity, metadata and timestamp fields carried through unchanged."""

    chip_id: str
    method: str
    target: str
    sample_location: str
    day: float
    hour: float
    minute: float
    assay_plate_id: Optional[str] = None
    assay_well_id: Optional[str] = None
    subtarget: Optional[str] = None
    caution_flag: Optional[str] = None
    exclude: Optional[str] = None
    replicate: Optional[float] = None
    cross_reference: Optional[str] = None


@dataclass(frozen=True)
class RawRecord:
    """One decoded input row."""

    fields: Passthrough
    value: Optional[float] = None
    value_unit: Optional[Unit] = None
    notes: Optional[str] = None
    normalization: Optional[NormalizationInfo] = None


@dataclass(frozen=True)
class NormalizedRecord:
    """One normalized output row; value_unit is always ng/day/10^6 cells."""

    fields: Passthrough
    value: float
    notes: str
    value_unit: Unit = OUTPUT_UNIT

    def to_row(self) -> Dict[str, Any]:
        """Serialize to a column header -> cell mapping in MIFC column order."""
        f = self.fields
        cells = {
            CHIP_ID: f.chip_id,
            ASSAY_PLATE_ID: f.assay_plate_id,
            ASSAY_WELL_ID: f.assay_well_id,
            METHOD: f.method,
            TARGET: f.target,
            SUBTARGET: f.subtarget,
            SAMPLE_LOCATION: f.sample_location,
            DAY: f.day,
            HOUR: f.hour,
            MINUTE: f.minute,
            VALUE: self.value,
            VALUE_UNIT: format_unit(self.value_unit),
            CAUTION_FLAG: f.caution_flag,
            EXCLUDE: f.exclude,
            NOTES: self.notes,
            REPLICATE: f.replicate,
            CROSS_REFERENCE: f.cross_reference,
        }
        return {col: cells[col] for col in MIFC_COLUMNS}


__all__ = [
    "MIFC_COLUMNS",
    "NORMALIZATION_COLUMNS",
    "NormalizationInfo",
    "Passthrough",
    "RawRecord",
    "NormalizedRecord",
]
