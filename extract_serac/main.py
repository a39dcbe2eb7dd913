"""
extract-serac command line entry point.

Usage:
    extract-serac -u <username> -p <password> [-o <file>]

    # Legacy document-store export
    extract-serac -u <username> -p <password> --sink documents --database-url postgresql://...

Credentials may also come from C2C_USERNAME / C2C_PASSWORD (environment or
.env file).

Exit status:
    0  success
    1  authentication, fetch, data or output failure
    2  usage error (e.g. missing credentials)
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import requests
from pydantic import ValidationError

from extract_serac import __version__
from extract_serac.config import settings
from extract_serac.exceptions import AuthenticationFailure, ExtractError
from extract_serac.services.c2c_client import C2CClient
from extract_serac.services.fetcher import fetch_all_reports
from extract_serac.services.flattener import (
    CURRENT_SCHEMA_VERSION,
    SCHEMAS,
    flatten_reports,
    header,
)
from extract_serac.sinks.csv_sink import write_csv
from extract_serac.sinks.document_store import upsert_documents

logger = logging.getLogger("extract_serac")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-serac",
        usage="extract-serac -u <username> -p <password> [-o <file>]",
        description="Export Camptocamp SERAC incident reports (x-reports) to CSV",
    )
    parser.add_argument(
        "-u", "--user",
        default=settings.C2C_USERNAME,
        help="Username for authentication",
    )
    parser.add_argument(
        "-p", "--password",
        default=settings.C2C_PASSWORD,
        help="Password for authentication",
    )
    parser.add_argument(
        "-o", "--output",
        default=settings.DEFAULT_OUTPUT,
        help=f"Where to store output CSV file (default: {settings.DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--sink",
        choices=["csv", "documents"],
        default="csv",
        help="Write a CSV file (default) or upsert into the document store",
    )
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="Postgres URL of the document store (--sink documents)",
    )
    parser.add_argument(
        "--schema-version",
        type=int,
        choices=sorted(SCHEMAS),
        default=CURRENT_SCHEMA_VERSION,
        help=f"CSV column layout (default: {CURRENT_SCHEMA_VERSION})",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=settings.PAGE_SIZE,
        help=f"Reports per listing page (default: {settings.PAGE_SIZE})",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while fetching",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate arguments; exits with status 2 on usage errors."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.user or not args.password:
        parser.error("username (-u) and password (-p) are required")
    if args.sink == "documents" and not args.database_url:
        parser.error("--database-url (or DATABASE_URL) is required with --sink documents")
    if args.page_size <= 0:
        parser.error("--page-size must be positive")

    return args


def run(args: argparse.Namespace) -> Path | int:
    """Authenticate, fetch every report and hand them to the selected sink."""
    client = C2CClient()
    client.login(args.user, args.password)

    reports = asyncio.run(
        fetch_all_reports(client, args.page_size, show_progress=args.progress)
    )

    if args.sink == "documents":
        return upsert_documents(reports, args.database_url)

    rows = flatten_reports(reports, args.schema_version)
    return write_csv(rows, header(args.schema_version), args.output)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        result = run(args)
    except AuthenticationFailure as e:
        logger.error(str(e))
        return 1
    except ExtractError as e:
        logger.error(f"Extraction failed: {e}")
        return 1
    except requests.exceptions.RequestException as e:
        logger.error(f"Camptocamp API request failed: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Unexpected Camptocamp API payload: {e}")
        return 1

    if args.sink == "documents":
        logger.info(f"Done - {result} documents upserted")
    else:
        logger.info(f"Done - output saved to {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
