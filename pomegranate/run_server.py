# pomegranate/run_server.py
"""Run the Pomegranate API server."""

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from pomegranate import __version__
from pomegranate.api.container import get_engine, get_repository, get_settings
from pomegranate.core.errors import RepositoryError, RuntimeConnectionError

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info(f"🚀 Starting Pomegranate version {__version__}")

    # Nothing can run without the daemon, fail before serving requests
    try:
        get_engine()
    except RuntimeConnectionError as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)

    try:
        get_repository()
    except (SQLAlchemyError, RepositoryError, OSError) as e:
        logger.error(f"Fatal error: cannot set up the deployment repository: {e}")
        sys.exit(1)

    logger.info(f"📍 Listening on {settings.host}:{settings.port}")

    uvicorn.run(
        "pomegranate.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
