"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tally.config import Settings
from tally.interface.api.routes import actions, answers, health, user_data
from tally.util.di.container import create_container, setup_di
from tally.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the DI container (and with it the database engine) on shutdown."""
    yield
    await app.state.dishka_container.close()


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        container: DI container; the production container when omitted
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Tally API",
        description="Votes, favorites and comments on answers, with optimistic client sync",
        version="0.1.0",
        lifespan=lifespan,
    )

    if settings.observability.instrument:
        instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.client.base_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(actions.router)
    app_instance.include_router(answers.router)
    app_instance.include_router(user_data.router)

    return app_instance
