"""Tests for batch normalization over rows, DataFrames and files."""

import importlib.util
import logging
from pathlib import Path

import pandas as pd
import pytest

from mifcnorm.batch import (
    normalize_frame,
    normalize_rows,
    normalize_table_file,
    read_table,
)
from mifcnorm.records import MIFC_COLUMNS


# ============================================================================
# Rows
# ============================================================================

class TestNormalizeRows:
    """Test row-by-row processing and skip reporting."""

    def test_all_rows_normalized(self, sd3_row):
        result = normalize_rows([sd3_row(), sd3_row({"Chip ID": "CHIP-08"})])
        assert len(result.normalized) == 2
        assert result.skipped == []
        assert [r.fields.chip_id for r in result.normalized] == ["CHIP-07", "CHIP-08"]

    def test_failures_are_skipped_not_fatal(self, sd3_row):
        rows = [
            sd3_row(),                                      # line 2
            sd3_row({"Exclude": "yes"}),                    # line 3
            sd3_row({"Value": ""}),                         # line 4
            sd3_row({"Value Unit": ""}),                    # line 5
            sd3_row({"Sample Volume": ""}),                 # line 6
            sd3_row({"Value Unit": "furlongs"}),            # line 7
            sd3_row({"Value Unit": "mL"}),                  # line 8
            sd3_row({"Estimated Cell Number": "0"}),        # line 9
            sd3_row({"Chip ID": ""}),                       # line 10
            sd3_row({"Chip ID": "LAST"}),                   # line 11
        ]
        result = normalize_rows(rows)

        assert [r.fields.chip_id for r in result.normalized] == ["CHIP-07", "LAST"]
        assert [(s.row_number, s.kind) for s in result.skipped] == [
            (3, "Excluded"),
            (4, "MissingValue"),
            (5, "MissingValueUnit"),
            (6, "MissingNormalizationInfo"),
            (7, "UnknownUnitError"),
            (8, "IncompatibleCategoryError"),
            (9, "DivisionByZero"),
            (10, "DecodeError"),
        ]
        assert result.total == 10

    def test_excluded_row_with_broken_cells(self, sd3_row):
        """Exclusion wins even when the row would not decode."""
        row = sd3_row({"Exclude": "x", "Chip ID": None, "Value Unit": "???"})
        result = normalize_rows([row])
        assert result.skipped[0].kind == "Excluded"

    def test_nan_text_skips_only_that_row(self, sd3_row):
        result = normalize_rows([sd3_row({"Sample Volume": "nan"}), sd3_row({"Chip ID": "AFTER"})])
        assert [s.kind for s in result.skipped] == ["DecodeError"]
        assert result.skipped[0].row_number == 2
        assert [r.fields.chip_id for r in result.normalized] == ["AFTER"]

    def test_whitespace_exclude_is_excluded(self, sd3_row):
        result = normalize_rows([sd3_row({"Exclude": " "})])
        assert [s.kind for s in result.skipped] == ["Excluded"]
        assert result.normalized == []

    def test_skips_are_logged_with_row_number(self, sd3_row, caplog):
        with caplog.at_level(logging.INFO, logger="mifcnorm.batch.batchapi"):
            normalize_rows([sd3_row(), sd3_row({"Exclude": "x"})], label="Sheet1")
        assert "did not normalize row 3 in Sheet1 (Excluded)" in caplog.text

    def test_first_row_number(self, sd3_row):
        result = normalize_rows([sd3_row({"Value": ""})], first_row_number=1)
        assert result.skipped[0].row_number == 1

    def test_empty_input(self):
        result = normalize_rows([])
        assert result.total == 0
        assert list(result.to_frame().columns) == MIFC_COLUMNS


# ============================================================================
# DataFrames
# ============================================================================

class TestNormalizeFrame:
    """Test DataFrame input and output."""

    def test_frame_round_trip(self, sd3_row):
        df = pd.DataFrame([sd3_row(), sd3_row({"Notes": "first pass"})])
        result = normalize_frame(df)
        out = result.to_frame()

        assert list(out.columns) == MIFC_COLUMNS
        assert len(out) == 2
        assert (out["Value Unit"] == "ng/day/10^6 cells").all()
        assert out["Value"].iloc[0] == pytest.approx(1835.801527, rel=1e-5)
        assert out["Notes"].iloc[1].startswith("first pass || Normalized from 153.9140 ng/mL")
        assert out["Chip ID"].iloc[0] == "CHIP-07"
        assert out["Assay Well ID"].iloc[0] == "A3"

    def test_nan_cells_are_absent(self, sd3_row):
        df = pd.DataFrame([sd3_row(), sd3_row({"Value": float("nan")})])
        result = normalize_frame(df)
        assert len(result.normalized) == 1
        assert result.skipped[0].kind == "MissingValue"

    def test_skipped_frame(self, sd3_row):
        df = pd.DataFrame([sd3_row({"Exclude": "x"})])
        report = normalize_frame(df).skipped_frame()
        assert list(report.columns) == ["row", "kind", "message"]
        assert report.iloc[0]["row"] == 2
        assert report.iloc[0]["kind"] == "Excluded"


# ============================================================================
# Files
# ============================================================================

class TestFiles:
    """Test reading tables and writing normalized CSV."""

    def test_csv_to_csv(self, sd3_row, tmp_path):
        src = tmp_path / "plate.csv"
        dst = tmp_path / "out" / "plate-normalized.csv"
        pd.DataFrame([sd3_row(), sd3_row({"Exclude": "x"})]).to_csv(src, index=False)

        result = normalize_table_file(src, dst)

        assert len(result.normalized) == 1
        assert len(result.skipped) == 1
        out = pd.read_csv(dst)
        assert list(out.columns) == MIFC_COLUMNS
        assert out["Value"].iloc[0] == pytest.approx(1835.801527, rel=1e-5)
        assert out["Value Unit"].iloc[0] == "ng/day/10^6 cells"

    def test_excel_sheet(self, sd3_row, tmp_path):
        src = tmp_path / "plate.xlsx"
        with pd.ExcelWriter(src) as writer:
            pd.DataFrame([sd3_row()]).to_excel(writer, sheet_name="Day 1", index=False)
            pd.DataFrame([sd3_row({"Value": "1360.2953"})]).to_excel(writer, sheet_name="Day 2", index=False)

        first = normalize_table_file(src, tmp_path / "first.csv")
        second = normalize_table_file(src, tmp_path / "second.csv", sheet="Day 2")

        assert first.normalized[0].value == pytest.approx(1835.801527, rel=1e-5)
        assert second.normalized[0].value == pytest.approx(16224.89623, rel=1e-5)

    def test_read_table_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "nope.csv")

    def test_read_table_unsupported(self, tmp_path):
        path = tmp_path / "plate.json"
        path.write_text("{}")
        with pytest.raises(ValueError, match="Unsupported"):
            read_table(path)


# ============================================================================
# CLI
# ============================================================================

def _load_cli():
    script = Path(__file__).parent.parent / "scripts" / "normalize_sd3.py"
    spec = importlib.util.spec_from_file_location("normalize_sd3", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCli:
    """Test the normalize_sd3.py script entry point."""

    def test_cli_success(self, sd3_row, tmp_path, capsys):
        src = tmp_path / "plate.csv"
        dst = tmp_path / "plate-normalized.csv"
        report = tmp_path / "skipped.csv"
        pd.DataFrame([sd3_row(), sd3_row({"Value": ""})]).to_csv(src, index=False)

        code = _load_cli().main([str(src), "-o", str(dst), "--skipped-report", str(report)])

        assert code == 0
        assert dst.exists()
        assert pd.read_csv(report)["kind"].tolist() == ["MissingValue"]
        assert "Normalized 1/2 rows" in capsys.readouterr().out

    def test_cli_missing_input(self, tmp_path, capsys):
        code = _load_cli().main([str(tmp_path / "nope.csv"), "-o", str(tmp_path / "out.csv")])
        assert code == 1
        assert "Input table not found" in capsys.readouterr().err
