#!/usr/bin/env python3
"""
Merchant Summary CLI: offline summaries and the API server.

USAGE:
  python -m merchant_summary.cli merchants export.xlsx
  python -m merchant_summary.cli summarize export.xlsx -m "ACME" -m "Globex" \\
      --rate 3.5 --start 2024-01-01 --end 2024-01-31 --output summary.xlsx
  python -m merchant_summary.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from merchant_summary.analytics.summary import summarize
from merchant_summary.data.ingest import ingest_rows
from merchant_summary.data.loader import read_raw_rows
from merchant_summary.errors import SummaryError
from merchant_summary.logging_setup import configure_logging
from merchant_summary.reports import summary_report


def _load(path: str):
    rows = read_raw_rows(path)
    return ingest_rows(rows, original_name=Path(path).name)


def cmd_merchants(args) -> int:
    """List merchants found in a workbook."""
    dataset = _load(args.file)
    print(f"\nMERCHANTS ({len(dataset.merchants)}) in {len(dataset):,} records:\n")
    for i, name in enumerate(dataset.merchants, 1):
        print(f"{i:<4}{name}")
    return 0


def cmd_summarize(args) -> int:
    """Summarize a workbook and write the Transactions/Summary export."""
    dataset = _load(args.file)
    result = summarize(dataset, args.merchant, args.start, args.end, args.rate)

    print("\n" + "=" * 70)
    print(f"  MERCHANT SUMMARY  |  {result.date_range}  |  {result.rate_label}")
    print("=" * 70)
    print(f"{'Merchant':<30}{'Withdrawal':>12}{'Fees':>10}{result.rate_label:>14}{'Count':>6}")
    for row in result.summary_rows:
        if row.is_total:
            print("-" * 72)
        print(f"{row.merchant[:29]:<30}{row.withdrawal:>12,.2f}{row.fees:>10,.2f}"
              f"{row.percent_amount:>14,.2f}{row.count:>6}")

    output = Path(args.output) if args.output else summary_report.new_output_path(Path.cwd())
    path = summary_report.generate_excel(result, output)
    print(f"\n  Saved: {path}\n")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Merchant Summary API on {args.host}:{args.port}...")
    uvicorn.run("merchant_summary.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Merchant Summary: withdrawal totals per merchant from transaction exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    merchants_parser = subparsers.add_parser("merchants", help="List merchants in a workbook")
    merchants_parser.add_argument("file", help="Path to .xlsx, .xls or .csv export")
    merchants_parser.set_defaults(func=cmd_merchants)

    summarize_parser = subparsers.add_parser("summarize", help="Summarize selected merchants")
    summarize_parser.add_argument("file", help="Path to .xlsx, .xls or .csv export")
    summarize_parser.add_argument("-m", "--merchant", action="append", default=[], help="Merchant name (repeatable)")
    summarize_parser.add_argument("--rate", required=True, help="Percentage 0-100")
    summarize_parser.add_argument("--start", required=True, help="Start date YYYY-MM-DD")
    summarize_parser.add_argument("--end", required=True, help="End date YYYY-MM-DD (inclusive)")
    summarize_parser.add_argument("--output", help="Workbook path (default: ./summary_<id>.xlsx)")
    summarize_parser.set_defaults(func=cmd_summarize)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(os.environ.get("MERCHANT_SUMMARY_LOG_LEVEL", "WARNING"))
    try:
        return args.func(args)
    except SummaryError as exc:
        print(f"  ERROR {exc.code}: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
