"""Shared test fixtures for mifcnorm tests."""

import pytest


def make_row(overrides=None):
    """Build a complete, valid SD3 row keyed by spreadsheet headers.

    Args:
        overrides: Header -> cell replacements; a None cell removes the column
    """
    row = {
        "Chip ID": "CHIP-07",
        "Assay Plate ID": "PLATE-1",
        "Assay Well ID": "A3",
        "Method/Kit": "ELISA",
        "Target/Analyte": "Albumin",
        "Subtarget": "",
        "Sample Location": "Efflux",
        "Day": "1",
        "Hour": "0",
        "Minute": "0",
        "Value": "153.914",
        "Value Unit": "ng/mL",
        "Caution Flag": "",
        "Exclude": "",
        "Notes": "",
        "Replicate": "1",
        "Cross Reference": "",
        "Duration Sample Collection (days)": "1",
        "Duration Sample Collection (hours)": "0",
        "Duration Sample Collection (minutes)": "0",
        "Sample Volume": "200",
        "Sample Volume Unit": "uL",
        "Estimated Cell Number": "16768",
    }
    for key, value in (overrides or {}).items():
        if value is None:
            row.pop(key, None)
        else:
            row[key] = value
    return row


@pytest.fixture
def sd3_row():
    """Fixture providing the SD3 row factory.

    Example:
        def test_excluded(sd3_row):
            row = sd3_row({"Exclude": "x"})
    """
    return make_row
