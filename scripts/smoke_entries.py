#!/usr/bin/env python
"""
Smoke test the entry endpoints of a running backend.

Creates a sample entry, lists the first page, updates the entry and
deletes it again, printing the status of every call.

Usage:
    # Against API_URL (or http://localhost:5000/api)
    python scripts/smoke_entries.py

    # Against another backend, leaving the sample entry in place
    python scripts/smoke_entries.py --base-url http://staging:5000/api --keep
"""

import sys
import argparse
from pathlib import Path

import requests

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from favorites.config import ApiClientConfig, load_api_client_config
from favorites.ui.utils.api_client import EntryApiClient
from favorites.utils.logging_config import configure_script_logging

SAMPLE_ENTRY = {
    "title": "Smoke Test Movie",
    "type": "Movie",
    "director": "Nobody",
    "year": 2000,
}


def extract_entry_id(body):
    """Pick the identifier out of a created entry."""
    if isinstance(body, dict):
        for key in ("_id", "id"):
            if body.get(key) is not None:
                return body[key]
    raise KeyError("created entry has no '_id' or 'id' field")


def run_smoke(client: EntryApiClient, limit: int = 20, keep: bool = False) -> dict:
    """Run create -> list -> update -> delete and return each status code.

    Once the sample entry exists it is deleted even when a later call
    fails, unless keep is set.
    """
    statuses = {}

    created = client.create_entry(SAMPLE_ENTRY)
    statuses["create"] = created.status_code
    entry_id = extract_entry_id(created.json())
    print(f"Created entry {entry_id}: {created.status_code}")

    try:
        listed = client.list_entries(page=1, limit=limit)
        statuses["list"] = listed.status_code
        print(f"Listed first page (limit={limit}): {listed.status_code}")

        updated = client.update_entry(entry_id, {**SAMPLE_ENTRY, "title": "Smoke Test Movie (edited)"})
        statuses["update"] = updated.status_code
        print(f"Updated entry {entry_id}: {updated.status_code}")
    finally:
        if not keep:
            deleted = client.delete_entry(entry_id)
            statuses["delete"] = deleted.status_code
            print(f"Deleted entry {entry_id}: {deleted.status_code}")

    return statuses


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Smoke test the entry API")
    parser.add_argument('--base-url', default=None,
                        help='Backend base URL (default: API_URL or http://localhost:5000/api)')
    parser.add_argument('--limit', type=int, default=20,
                        help='Page size for the list call (default: 20)')
    parser.add_argument('--keep', action='store_true',
                        help='Do not delete the sample entry afterwards')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    args = parser.parse_args(argv)

    configure_script_logging(debug=args.debug)

    config = load_api_client_config()
    if args.base_url:
        config = ApiClientConfig(base_url=args.base_url, timeout=config.timeout)

    with EntryApiClient(config) as client:
        try:
            run_smoke(client, limit=args.limit, keep=args.keep)
        except (requests.RequestException, KeyError) as e:
            print(f"Smoke test failed: {e}")
            return 1

    print("Smoke test passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
