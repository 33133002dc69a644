#!/usr/bin/env python3
"""
Main entry point for Nicor Gas bill downloading.

Usage:
    python -m nicor_gas.main --from 2020-01 --to 2023-12    # Bulk download
    python -m nicor_gas.main --from 2023-06                 # Single month
    python -m nicor_gas.main --from 2023-01 --start-day 10 --stop-day 25
    python -m nicor_gas.main --from 2023-01 --visible       # Show browser (debug)
    python -m nicor_gas.main --from 2023-01 --json          # Output as JSON
"""
import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .bill_storage import FileStorage, get_bills_directory, get_project_root
from .bulk import bulk_locate
from .dates import parse_month
from .errors import AuthenticationError
from .fetcher import DocumentFetcher
from .locator import BillLocator
from .models import BulkResult, PollingOptions
from .scraper import NicorGasAuthenticator

logger = logging.getLogger(__name__)

REQUIRED_ENV = ["NICOR_GAS_USER", "NICOR_GAS_PASS", "NICOR_GAS_ACCOUNT", "NICOR_GAS_BILLING_ID"]


def load_env(root: Optional[Path] = None) -> bool:
    """Load environment variables from .env files."""
    root = root or get_project_root()
    loaded = False
    # Load in order - later files override earlier ones
    for env_file in [".env", ".env.local"]:
        env_path = root / env_file
        if env_path.exists():
            load_dotenv(env_path, override=True)
            loaded = True
    return loaded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bulk download Nicor Gas bills by polling issue dates")
    parser.add_argument("--from", dest="start", type=parse_month, required=True,
                        help="First month to download (YYYY-MM)")
    parser.add_argument("--to", dest="end", type=parse_month,
                        help="Last month to download (YYYY-MM, defaults to --from)")
    parser.add_argument("--output-dir", type=str, default=str(get_bills_directory()),
                        help="Directory to save PDFs into")
    defaults = PollingOptions()
    parser.add_argument("--start-day", type=int, default=defaults.start_trying_on,
                        help="Day of month to start polling on")
    parser.add_argument("--stop-day", type=int, default=defaults.stop_trying_on,
                        help="Day of month to stop polling on")
    parser.add_argument("--visible", action="store_true", help="Run browser in visible mode")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--output", "-o", type=str, help="Output JSON to file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")
    return parser


def print_results(result: BulkResult):
    """Human readable summary."""
    print("\n" + "="*60)
    print("NICOR GAS FETCH RESULTS")
    print("="*60)
    print(f"Success: {result.success}")
    print(f"Months searched: {len(result.results)}")
    print(f"PDFs: {len(result.downloaded_pdfs)}")

    if result.results:
        print("\n" + "-"*60)
        for located in result.results:
            month = located.month.strftime("%m/%Y")
            if located.success:
                print(f"{month}: {located.bill_date} -> {located.pdf_path} ({located.probes} requests)")
            else:
                print(f"{month}: FAILED ({located.failure.value}) after {located.probes} requests")

    if result.errors:
        print("\nErrors:")
        for err in result.errors:
            print(f"  - {err}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    load_env()
    missing = [name for name in REQUIRED_ENV if not os.getenv(name)]
    if missing:
        print(f"Error: {', '.join(missing)} must be set in .env or .env.local", file=sys.stderr)
        return 1

    account_number = os.getenv("NICOR_GAS_ACCOUNT")
    billing_id = os.getenv("NICOR_GAS_BILLING_ID")
    options = PollingOptions(start_trying_on=args.start_day, stop_trying_on=args.stop_day)
    output_dir = Path(args.output_dir)

    authenticator = NicorGasAuthenticator(account_number=account_number, screenshot_dir=str(output_dir))
    logger.info(f"Starting Nicor Gas login (headless={not args.visible})...")
    try:
        credential = authenticator.authenticate(
            os.getenv("NICOR_GAS_USER"),
            os.getenv("NICOR_GAS_PASS"),
            headless=not args.visible,
        )
    except AuthenticationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with DocumentFetcher() as fetcher:
        result = bulk_locate(
            BillLocator(fetcher),
            start=args.start,
            end=args.end or args.start,
            account_number=account_number,
            billing_id=billing_id,
            credential=credential,
            options=options,
            storage=FileStorage(output_dir),
        )

    if args.json or args.output:
        output_data = result.to_dict()
        output_data["timestamp"] = datetime.now().isoformat()
        output_json = json.dumps(output_data, indent=2)

        if args.output:
            with open(args.output, 'w') as f:
                f.write(output_json)
            print(f"Results saved to: {args.output}", file=sys.stderr)
        else:
            print(output_json)
    else:
        print_results(result)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
