"""
Populate an empty vault with the starter items.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portal.dependencies import get_repository, uses_in_memory_store
from portal.site import seed_vault


logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    if uses_in_memory_store():
        logger.error(
            "No document store configured; set PORTAL_STORE_BACKEND=firestore "
            "or PORTAL_STORE_BACKEND=sql with DATABASE_URL"
        )
        return 1
    seeded = seed_vault(get_repository())
    logger.info("Seeded %d items", seeded)
    return 0


if __name__ == "__main__":
    sys.exit(main())
