"""
Approve an account as Admin directly in the configured document store.

Use when nobody can sign in to the admin area to approve the first account.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portal.accounts import force_approve_admin
from portal.dependencies import get_repository, uses_in_memory_store
from portal.errors import NotFoundError


logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", required=True, help="E-mail of the profile to approve")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    if uses_in_memory_store():
        logger.error(
            "No document store configured; set PORTAL_STORE_BACKEND=firestore "
            "or PORTAL_STORE_BACKEND=sql with DATABASE_URL"
        )
        return 1
    repo = get_repository()
    try:
        user = force_approve_admin(repo, args.email)
    except NotFoundError as e:
        logger.error("%s", e)
        for known in repo.list_users():
            logger.info("Known profile: %s %s", known.id, known.email)
        return 1

    logger.info("Approved %s (%s) as %s", user.email, user.id, user.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
