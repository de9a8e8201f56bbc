"""Records module: SD3 row types, decoding and normalization.

Public API:
    decode_row(row) -> RawRecord
        Decode one spreadsheet row (header -> cell mapping)

    normalize_record(raw) -> NormalizedRecord
        Normalize to ng/day/10^6 cells, or raise a RowError

    to_ng_day_million_cells(value, value_unit, info) -> float
        The bare calculation, without record handling

Examples:
    >>> from mifcnorm.records import decode_row, normalize_record
    >>>
    >>> raw = decode_row({
    ...     "Chip ID": "C1", "Method/Kit": "ELISA", "Target/Analyte": "Albumin",
    ...     "Sample Location": "Efflux", "Day": 1, "Hour": 0, "Minute": 0,
    ...     "Value": 153.914, "Value Unit": "ng/mL",
    ...     "Duration Sample Collection (days)": 1,
    ...     "Duration Sample Collection (hours)": 0,
    ...     "Duration Sample Collection (minutes)": 0,
    ...     "Sample Volume": 200, "Sample Volume Unit": "uL",
    ...     "Estimated Cell Number": 16768,
    ... })
    >>> normalize_record(raw).value
    1835.8015...
"""

from .recordmodels import (
    MIFC_COLUMNS,
    NORMALIZATION_COLUMNS,
    NormalizationInfo,
    Passthrough,
    RawRecord,
    NormalizedRecord,
)
from .recorddecode import decode_row
from .recordnormalize import (
    normalize_record,
    to_ng_day_million_cells,
    build_provenance_note,
)

__all__ = [
    "MIFC_COLUMNS",
    "NORMALIZATION_COLUMNS",
    "NormalizationInfo",
    "Passthrough",
    "RawRecord",
    "NormalizedRecord",
    "decode_row",
    "normalize_record",
    "to_ng_day_million_cells",
    "build_provenance_note",
]
