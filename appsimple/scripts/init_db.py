"""
Create the schema and the protected admin if missing. Safe to run on every deploy:

  python -m appsimple.scripts.init_db
"""

import logging
import sys

from appsimple.api.deps import get_bootstrap
from appsimple.core.config import get_settings
from appsimple.core.logs import configure_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Run the idempotent bootstrap."""
    configure_logging(get_settings().LOG_LEVEL)
    try:
        seeded = get_bootstrap().bootstrap()
    except Exception as e:
        logger.exception("Database bootstrap failed: %s", e)
        return 1
    logger.info("Database bootstrap completed: admin_seeded=%s", seeded)
    return 0


if __name__ == "__main__":
    sys.exit(main())
