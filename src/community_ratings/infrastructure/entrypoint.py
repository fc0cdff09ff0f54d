"""
Application Entrypoint
======================

CLI entrypoint for running the API server.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
import uvloop


def main() -> None:
    """Run the API server using uvicorn."""
    uvloop.install()

    from community_ratings.infrastructure.config import get_settings
    from community_ratings.infrastructure.logging import (
        ThrottledPathAccessFilter,
        configure_logging,
    )

    settings = get_settings()
    configure_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting {settings.api.title} v{settings.api.version}")
    logger.info(f"Environment: {settings.environment}")

    logging.getLogger("uvicorn.access").addFilter(
        ThrottledPathAccessFilter(min_interval_seconds=120.0)
    )

    if settings.api.workers > 1:
        # Each worker would hold its own ratings store and its own batch loop.
        logger.warning(
            "Running %d workers: ratings are not shared between workers",
            settings.api.workers,
        )

    uvicorn.run(
        "community_ratings.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main() or 0)
