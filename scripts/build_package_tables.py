#!/usr/bin/env python3
"""
Build Package Tables

Parses the Package_Container and Package_Size fields of the medicine source
file into the two child tables and prints a verification report.
Output files are rewritten from scratch on every run.

Usage:
    python3 scripts/build_package_tables.py --input source_data/Medicine.csv
    python3 scripts/build_package_tables.py --input Medicine.csv --output-dir output/tables
    python3 scripts/build_package_tables.py --input Medicine.csv --fixed-point --verbose
    python3 scripts/build_package_tables.py --input Medicine.csv --quiet --log-file logs/parse.log
"""

import argparse
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pharmapack.common.config_loader import load_parser_settings
from pharmapack.common.csv_utils import write_csv
from pharmapack.common.log_config import setup_logging
from pharmapack.loading import (
    CONTAINER_FIELDNAMES,
    PACK_SIZE_FIELDNAMES,
    RowMaterializer,
    read_medicine_records,
)

logger = logging.getLogger("pharmapack.scripts.build_package_tables")


def main():
    parser = argparse.ArgumentParser(
        description="Parse medicine packaging descriptors into child tables"
    )
    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Medicine source CSV (Brand_ID, Package_Container, Package_Size columns)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default="output/tables",
        help="Directory for the child table CSVs (default: output/tables)"
    )
    parser.add_argument(
        "--fixed-point",
        action="store_true",
        help="Apply fragment rewrite rules until none matches (default: one rule per field)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )
    parser.add_argument(
        "--log-file",
        help="Write per-record parse details (DEBUG) to this file"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not os.path.exists(args.input):
        print(f"Input file not found: {args.input}")
        sys.exit(1)

    settings = load_parser_settings()
    os.makedirs(args.output_dir, exist_ok=True)

    container_csv = os.path.join(args.output_dir, "package_container.csv")
    pack_size_csv = os.path.join(args.output_dir, "package_size.csv")

    print("=" * 60)
    print("Package Table Build")
    print("=" * 60)
    print(f"  Input file:       {args.input}")
    print(f"  Container table:  {container_csv}")
    print(f"  Pack-size table:  {pack_size_csv}")
    print(f"  Currency marker:  {settings.currency_marker}")
    print(f"  Fixed point:      {args.fixed_point}")

    materializer = RowMaterializer(settings, to_fixed_point=args.fixed_point)
    result = materializer.materialize(read_medicine_records(args.input))

    written = write_csv(
        container_csv,
        [row.as_dict() for row in result.container_rows],
        fieldnames=CONTAINER_FIELDNAMES,
    )
    logger.info("Wrote %d rows to %s", written, container_csv)

    written = write_csv(
        pack_size_csv,
        [row.as_dict() for row in result.pack_size_rows],
        fieldnames=PACK_SIZE_FIELDNAMES,
    )
    logger.info("Wrote %d rows to %s", written, pack_size_csv)

    result.summary.print_final_report()

    if result.summary.has_discrepancies():
        sys.exit(1)


if __name__ == "__main__":
    main()
