"""Dependency injection container."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from showtalk.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component gets its production implementation; settings
    are loaded from the environment when first resolved.

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app, replacing any previous one.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)


@asynccontextmanager
async def di_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close whichever container is attached when the app shuts down.

    Closing the container disposes APP-scoped resources such as the
    database engine.
    """
    yield
    logfire.info("Closing DI container")
    await app.state.dishka_container.close()
