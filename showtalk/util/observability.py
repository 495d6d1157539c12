"""Logfire setup for the comments API.

Services log through logfire directly:

    with logfire.span("comment_service.delete_comment", comment_id=str(cid)):
        ...
        logfire.info("Comment deleted", comment_id=str(cid))

Tests call logfire.configure(send_to_logfire=False, console=False) instead of
configure_logfire.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from showtalk.config import Settings

SERVICE_NAME = "showtalk-comments"

# Session cookie name; the default scrubber already covers "authorization"
SCRUB_PATTERNS = ["auth_token"]


def resolve_send_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send only when a token is present."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry to Logfire cloud and
    OBSERVABILITY__SEND_TO_LOGFIRE to override that choice. Without a token
    output only goes to the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = resolve_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _thread_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    """Tag request spans with the discussion or comment being accessed."""
    result = {**attributes}
    path_params = getattr(request, "path_params", None) or {}
    for key in ("discussion_id", "comment_id"):
        if key in path_params:
            result[key] = path_params[key]
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_thread_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued by the repositories.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
