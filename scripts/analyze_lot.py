#!/usr/bin/env python3
"""
Parking Snapshot Analyzer

Cross-checks a parking snapshot against the user roster and prints every
inconsistency found.

Usage:
    python -m scripts.analyze_lot --park data/parking.json --users data/users.json

Exit code is 0 when no issues are found, 1 otherwise.
"""

import argparse
import sys

from src.platform.exception.exceptions import StorageError
from src.service.spaces.app.query.analyze_lot_use_case import AnalyzeLotUseCase
from src.service.spaces.driven_adapter.json_lot_snapshot_store import JsonLotSnapshotStore
from src.service.user.driven_adapter.json_user_roster_store import JsonUserRosterStore


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Check a parking snapshot for inconsistencies')
    parser.add_argument('--park', required=True, help='parking snapshot, e.g. parking.json')
    parser.add_argument('--users', required=True, help='user roster, e.g. users.json')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        lot = JsonLotSnapshotStore(args.park).load()
        roster = JsonUserRosterStore(args.users).load()
    except StorageError as e:
        print(f'ERROR: {e}')
        return 2

    # Read-only run: nothing may be written back
    lot.store = None
    roster.store = None

    issues = AnalyzeLotUseCase(lot=lot, user_rights=roster).execute()
    for issue in issues:
        print(issue)

    if issues:
        print(f'FAIL: {len(issues)} issues found in {args.park!r}')
        return 1
    print(f'SUCCESS: No issues found in {args.park!r}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
