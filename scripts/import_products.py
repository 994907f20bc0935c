"""
Import a product CSV for one owner from the command line.

Runs the same reconciliation as the upload endpoint, using the service-role
client so it works outside row-level security.

Usage:
    python scripts/import_products.py --owner <user-uuid> --file products.csv
    python scripts/import_products.py --owner <user-uuid> --file products.csv --dry-run
"""

import argparse
import asyncio
import os
import sys

# Allow imports from the project root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(_root_dir, ".env"))

from config import get_admin_client
from exceptions import AppError
from parsers.csv_parser import parse_product_csv
from services.import_service import ImportService
from services.product_service import ProductService
from services.product_store import SupabaseProductStore


def print_progress(fraction: float) -> None:
    print(f"\r  Progress: {fraction * 100:5.1f}%", end="", flush=True)


def main() -> int:
    parser = argparse.ArgumentParser(description="Import a product CSV for one owner")
    parser.add_argument(
        "--owner",
        required=True,
        help="Owner (user) id the products belong to",
    )
    parser.add_argument(
        "--file",
        required=True,
        help="Path to the CSV file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report row count without writing",
    )
    args = parser.parse_args()

    print("=" * 50)
    print("PRODUCT CSV IMPORT")
    print(f"Owner: {args.owner}")
    print(f"File:  {args.file}")
    print("=" * 50)

    try:
        with open(args.file, "rb") as fh:
            content = fh.read()

        if args.dry_run:
            rows = parse_product_csv(content)
            print(f"Parsed {len(rows)} rows (dry run, nothing written)")
            return 0

        client = get_admin_client()
        if client is None:
            print("Error: SUPABASE_SERVICE_KEY is not configured")
            return 1

        service = ImportService(SupabaseProductStore(ProductService(client)))
        outcome = asyncio.run(
            service.import_file(content, args.owner, on_progress=print_progress)
        )
    except AppError as e:
        print(f"Error: {e.message}")
        return 1

    print()
    print(f"Created: {outcome.created}")
    print(f"Updated: {outcome.updated}")
    print(f"Failed:  {outcome.failed}")
    for message in outcome.errors:
        print(f"  - {message}")

    return 1 if outcome.failed else 0


if __name__ == "__main__":
    sys.exit(main())
