#!/usr/bin/env python3
"""
run_charts.py

Builds spending charts from a transactions workbook (.xlsx).

For every worksheet:
- folds rows into a category x period ledger (month / quarter / year)
- takes the trailing window of closed periods (latest period is dropped)
- draws "Regular spendings" and "All spendings" charts with a Total line

Usage examples:
  python run_charts.py --file money.xlsx
  python run_charts.py --file money.xlsx --group_by quarter --window 8 --format html
  python run_charts.py --file money.xlsx --show

Environment Variables (read from .env when flags are omitted):
- SPENDING_INPUT_XLSX: workbook path
- SPENDING_OUTPUT_DIR: output root, charts go to <root>/charts (default: outputs)
- SPENDING_GROUP_BY: month | quarter | year (default: month)
- SPENDING_WINDOW: trailing window size (default: 12)
- SPENDING_IMAGE_FORMAT: html | svg | png (default: svg)
- SPENDING_SHARED_WINDOW: 1 to use one window across all worksheets
"""

from __future__ import annotations

import argparse

from spending_charts.charts import save_chart, show_chart
from spending_charts.config import IMAGE_FORMATS
from spending_charts.io import SourceOpenError, ensure_dirs, load_settings, open_workbook
from spending_charts.periods import Granularity
from spending_charts.pipeline import ReportError, build_reports


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Spending charts by category from a transactions workbook.")
    ap.add_argument("-f", "--file", type=str, help="Path to the .xlsx workbook")
    ap.add_argument("-g", "--group_by", type=str, choices=[g.value for g in Granularity], help="Period granularity (default: month)")
    ap.add_argument("--window", type=int, help="Number of closed periods to chart (default: 12)")
    ap.add_argument("--output_dir", type=str, help="Directory to write outputs")
    ap.add_argument("--format", dest="image_format", choices=IMAGE_FORMATS, help="Chart file format (default: svg)")
    ap.add_argument("--shared_window", action="store_true", default=None, help="Use one period window across all worksheets")
    ap.add_argument("--show", action="store_true", help="Open interactive charts instead of writing files")
    return ap.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    s = load_settings(
        input_xlsx=args.file,
        output_dir=args.output_dir,
        group_by=args.group_by,
        window_size=args.window,
        shared_window=args.shared_window,
        image_format=args.image_format,
    )

    print("=" * 60)
    print("SPENDING CHARTS")
    print("=" * 60)
    print(f"Input:    {s.input_xlsx}")
    print(f"Group by: {s.group_by.value} (window: {s.window_size})")
    print()

    try:
        workbook = open_workbook(s.input_xlsx)
    except SourceOpenError as e:
        print(f"\n✗ Error: {e}")
        raise

    result = build_reports(workbook, s)

    if not args.show:
        ensure_dirs(s)
    taken = set()

    for rep in result.reports:
        print(f"[OK] Sheet '{rep.worksheet}': {len(rep.ledger)} categories, "
              f"periods {rep.window[0] + '..' + rep.window[-1] if rep.window else '(none)'}")
        if rep.skipped_rows:
            print(f"[INFO] Sheet '{rep.worksheet}': {rep.skipped_rows} unreadable rows skipped")
        for request in rep.requests:
            if args.show:
                show_chart(request)
            else:
                path = save_chart(request, s.charts_dir, s, taken)
                print(f"  Wrote {path}")

    if result.errors:
        err = ReportError(result.errors, result.requests)
        print("\n✗ Some worksheets could not be processed:")
        for e in result.errors:
            print(f"  [ERROR] {e}")
        raise err

    print(f"\n✓ Charts complete: {len(result.requests)} charts from {len(result.reports)} worksheets")


if __name__ == "__main__":
    main()
