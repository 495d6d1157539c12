#!/usr/bin/env python3
"""Serve the comments API, reporting startup failures to Logfire."""

import os
import sys
import logfire
import uvicorn

from showtalk.config import Settings
from showtalk.util.observability import configure_logfire

# Address uvicorn binds to; settings.host is the public hostname
BIND_HOST = os.environ.get("BIND_HOST", "0.0.0.0")


def main() -> int:
    """Run uvicorn against the app factory."""
    settings = Settings()

    # Configured before the app is built so import errors are captured
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting comments API",
            bind_host=BIND_HOST,
            port=settings.port,
            public_url=settings.api.base_url,
        )
        uvicorn.run(
            "showtalk.interface.api.app:create_app",
            factory=True,
            host=BIND_HOST,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.environment != "development",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
