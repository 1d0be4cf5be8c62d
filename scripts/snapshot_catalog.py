"""Download the hero/item/weapon/ability catalog into a snapshot directory.

The directory can then be used offline via DEADLOCK_CATALOG_DIR or the
scripts' --snapshot flag.

Usage:
    python -m scripts.snapshot_catalog OUT_DIR [--api-url URL]
"""

import argparse
import logging
from pathlib import Path

from deadlock_planner.catalog.catalog import write_snapshot
from deadlock_planner.catalog.client import CatalogError, DeadlockApiClient
from deadlock_planner.ui.bootstrap import config_from_env


def main() -> int:
    parser = argparse.ArgumentParser(description="Save the asset catalog as JSON files")
    parser.add_argument("out_dir", type=Path, help="Directory to write snapshot files into.")
    parser.add_argument("--api-url", help="Asset API base URL (default: DEADLOCK_API_URL or public API).")
    parser.add_argument("--verbose", action="store_true", help="Log each request.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = config_from_env()
    client = DeadlockApiClient(args.api_url or config.api_base_url, timeout=config.request_timeout)
    try:
        counts = write_snapshot(client, args.out_dir)
    except CatalogError as exc:
        print(f"Error: {exc}")
        return 1
    for name, count in counts.items():
        print(f"{name}: {count}")
    print(f"Snapshot written to {args.out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
