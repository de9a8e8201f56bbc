#!/usr/bin/env python3
"""CLI for normalizing an SD3 sheet into an MIFC CSV in ng/day/10^6 cells.

Reads one sheet of an SD3 workbook (MIFC columns + normalization info
columns), or an equivalent CSV, normalizes every usable row and writes
the result as CSV. Rows that cannot be normalized are skipped and
reported with their spreadsheet row number.

Usage:
    # Normalize the first sheet
    python scripts/normalize_sd3.py plate.xlsx --output plate-normalized.csv

    # Pick a sheet, show skipped rows
    python scripts/normalize_sd3.py plate.xlsx -o out.csv --sheet "Day 3" -v

    # Also write a skip report
    python scripts/normalize_sd3.py plate.csv -o out.csv --skipped-report skipped.csv

Environment Variables:
    MIFCNORM_OUTPUT: Default output path when --output is not given
    MIFCNORM_UNIT_ALIASES: Alternative unit alias YAML file
"""

import argparse
import logging
import os
import sys
import traceback
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mifcnorm.batch.batchapi import normalize_table_file

LOG_LEVELS = [logging.ERROR, logging.INFO, logging.DEBUG]


def _sheet_arg(value: str):
    """Sheet names that are plain integers select by index."""
    return int(value) if value.isdigit() else value


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Normalize an SD3 sheet into an MIFC CSV in ng/day/10^6 cells',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'input',
        type=Path,
        help='SD3 workbook (.xlsx/.xlsm/.xls) or CSV file'
    )

    env_output = os.environ.get('MIFCNORM_OUTPUT')
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=Path(env_output) if env_output else None,
        required=env_output is None,
        help='Output CSV path (default: $MIFCNORM_OUTPUT)'
    )
    parser.add_argument(
        '--sheet', '-s',
        type=_sheet_arg,
        default=None,
        help='Sheet name or 0-based index (default: first sheet)'
    )
    parser.add_argument(
        '--skipped-report',
        type=Path,
        default=None,
        help='Write skipped rows (row, kind, message) to this CSV'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase log detail (-v info, -vv debug)'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    try:
        result = normalize_table_file(args.input, args.output, sheet=args.sheet)

        if args.skipped_report is not None:
            result.skipped_frame().to_csv(args.skipped_report, index=False)

        print(f"Normalized {len(result.normalized)}/{result.total} rows -> {args.output}")
        if result.skipped:
            print(f"Skipped {len(result.skipped)} rows (use -v for details)")
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
