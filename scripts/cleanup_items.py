"""
Delete vault items whose title matches exactly.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portal.content import delete_items
from portal.dependencies import get_repository, uses_in_memory_store


logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--title", required=True, help="Exact title to delete")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the matching items without deleting them",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    if uses_in_memory_store():
        logger.error(
            "No document store configured; set PORTAL_STORE_BACKEND=firestore "
            "or PORTAL_STORE_BACKEND=sql with DATABASE_URL"
        )
        return 1
    repo = get_repository()
    matches = repo.find_items_by_title(args.title)
    logger.info('Found %d items titled "%s"', len(matches), args.title)
    for item in matches:
        logger.info("%s %s", "Would delete" if args.dry_run else "Deleting", item.id)

    if not args.dry_run:
        deleted = delete_items(repo, [item.id for item in matches])
        logger.info("Deleted %d items", deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
