from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.services.demo_data_service import generate_demo_data
from app.services.webdav_store import StoreError
from app.store import get_records


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Merge demo years, classes, students and records into the remote store.')
    parser.add_argument('--seed', type=int, default=None, help='Seed for a reproducible data set.')
    return parser.parse_args()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s %(message)s')
    args = parse_args()
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        summary = generate_demo_data(get_records(), rng=rng)
    except StoreError as exc:
        print(f'Demo data failed: {exc}')
        return 1
    print(
        f'Done: {summary.incidents} incidents, {summary.conversations} conversations, '
        f'{summary.meeting_minutes} meeting minutes, {summary.students} students in {summary.classes} classes.'
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
