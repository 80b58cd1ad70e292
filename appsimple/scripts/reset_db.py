"""
Erase all users and reseed the protected admin plus the sample accounts.
Destructive; stop the API first or expect concurrent writes to fail.

  python -m appsimple.scripts.reset_db --yes

Tokens issued before the reset stay valid until they expire; rotate
JWT_SECRET as well if existing sessions must end.
"""

import argparse
import logging
import sys

from appsimple.api.deps import get_bootstrap
from appsimple.core.config import get_settings
from appsimple.core.logs import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reset the AppSimple user database.")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm that all user data may be erased",
    )
    args = parser.parse_args(argv)
    if not args.yes:
        print("Refusing to reset without --yes (all user data will be erased).", file=sys.stderr)
        return 2

    configure_logging(get_settings().LOG_LEVEL)
    try:
        total = get_bootstrap().reset_and_reseed()
    except Exception as e:
        logger.exception("Database reset failed: %s", e)
        return 1
    print(f"Database reset complete: {total} users.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
