"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showtalk.config import Settings
from showtalk.interface.api.routes import comments, health, reactions, votes
from showtalk.util.di.container import create_container, di_lifespan, setup_di
from showtalk.util.observability import instrument_fastapi

LOCAL_FRONTEND = "http://localhost:3000"


def allowed_origins(settings: Settings) -> list[str]:
    """Frontend origins allowed to send the auth cookie."""
    origins = [settings.api.frontend_url]
    if settings.environment in ("test", "development"):
        origins.append(LOCAL_FRONTEND)
    return list(dict.fromkeys(origins))


def create_app() -> FastAPI:
    """Create the comments API.

    Logfire must already be configured: scripts/start_app.py does it for
    deployments and tests/conftest.py for the test suite. Tests swap the
    production container for an in-memory one with setup_di.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Show Talk Discussions API",
        description="Threaded comments, votes and reactions for Show Talk discussions",
        version="0.1.0",
        lifespan=di_lifespan,
    )

    instrument_fastapi(app_instance)

    # Browsers send the auth_token cookie cross-origin, hence credentials
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        max_age=600,
    )

    setup_di(app_instance, create_container())

    # Vote and reaction paths must be matched before /comments/{comment_id}
    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(reactions.router)
    app_instance.include_router(comments.router)

    return app_instance
