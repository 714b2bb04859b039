#!/usr/bin/env python3
"""
CLI tool for generating red tag analytics reports and exports.

Usage:
    python3 scripts/generate_redtag_report.py [options]

Examples:
    # Markdown dashboard to stdout
    python3 scripts/generate_redtag_report.py --records records.jsonl

    # HTML dashboard to a file
    python3 scripts/generate_redtag_report.py --format html --output dashboard.html

    # Dashboard plus the CSV export
    python3 scripts/generate_redtag_report.py --export-dir exports/

    # CSV export only
    python3 scripts/generate_redtag_report.py --export-only --export-dir exports/
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from metrics.config import config
from records.store import RecordStore
from reporting import ReportGenerator
from reporting.generator import FORMATS


def main(argv=None):
    default_format = config.get("reporting.default_format", "markdown")
    if default_format not in FORMATS:
        print(f"Warning: Unknown reporting.default_format {default_format!r}, using markdown",
              file=sys.stderr)
        default_format = "markdown"

    parser = argparse.ArgumentParser(
        description="Generate red tag analytics reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --records records.jsonl
  %(prog)s --format html --output dashboard.html
  %(prog)s --export-dir exports/
  %(prog)s --export-only --export-dir exports/
        """,
    )

    parser.add_argument(
        "--records",
        type=str,
        metavar="PATH",
        help="Path to the records log (default: records.log_path from config)",
    )

    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=default_format,
        help="Output format (default: reporting.default_format from config)",
    )

    parser.add_argument(
        "--output",
        type=str,
        metavar="PATH",
        help="Output file path (default: print to stdout)",
    )

    parser.add_argument(
        "--reasons",
        action="store_true",
        help="Include the removal reason ranking",
    )

    parser.add_argument(
        "--export-dir",
        type=str,
        metavar="DIR",
        help="Also write the CSV export to this directory",
    )

    parser.add_argument(
        "--export-only",
        action="store_true",
        help="Write the CSV export without generating a report",
    )

    args = parser.parse_args(argv)

    if (args.export_dir or args.export_only) and not config.is_enabled("export"):
        print("Error: CSV export is disabled (export.enabled is false in config)", file=sys.stderr)
        return 1

    records_path = Path(args.records) if args.records else config.get_path("records.log_path")
    try:
        store = RecordStore.load(records_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Log at least one red tag or pass --records.", file=sys.stderr)
        return 1

    generator = ReportGenerator(store=store)

    try:
        if not args.export_only:
            report = generator.generate_report(
                format=args.format,
                output_path=Path(args.output) if args.output else None,
                include_reasons=args.reasons or None,
            )

            if args.output:
                print(f"Report written to: {args.output}", file=sys.stderr)
            else:
                print(report)

        if args.export_dir or args.export_only:
            export_dir = Path(args.export_dir) if args.export_dir else None
            path = generator.export_csv_file(output_dir=export_dir)
            print(f"Export written to: {path}", file=sys.stderr)

        return 0

    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
