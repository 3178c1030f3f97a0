"""Bulk-register MSDS records from a spreadsheet against a running cobalt API."""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from cobalt.client import MsdsClient
from cobalt.utils.importer import WorkbookError, parse_workbook, upload_rows

log = logging.getLogger("cobalt.import")


async def run(path: Path, api_url: str, dry_run: bool = False) -> int:
    try:
        rows, skipped = parse_workbook(path.read_bytes())
    except WorkbookError as exc:
        log.error("%s: %s", path, exc)
        return 2

    log.info("Parsed %d rows from %s (%d without a name skipped)", len(rows), path, skipped)

    if dry_run:
        json.dump([row.preview() for row in rows], sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
        return 0

    async with MsdsClient(api_url) as client:
        async def refresh() -> None:
            listing = await client.list_msds(page_size=1)
            log.info("Registry now holds %d MSDS records", listing["total"])

        results = await upload_rows(rows, client.create_msds, on_complete=refresh)

    for result in results:
        if not result.success:
            log.error("Failed: %s: %s", result.name, result.error)

    succeeded = sum(result.success for result in results)
    log.info("Done: %d succeeded, %d failed", succeeded, len(results) - succeeded)
    return 0 if succeeded == len(results) else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import MSDS records from an .xlsx workbook")
    parser.add_argument("workbook", type=Path, help="Path to the .xlsx file")
    parser.add_argument("--api", default="http://localhost:8000", help="Base URL of the cobalt API")
    parser.add_argument("--dry-run", action="store_true", help="Print the parsed rows without uploading")
    args = parser.parse_args(argv)

    return asyncio.run(run(args.workbook, args.api, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
