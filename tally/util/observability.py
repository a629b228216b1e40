"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Vote cast", answer_id=answer_id, level=level)

    with logfire.span("vote_service.cast_vote", answer_id=answer_id):
        ...
"""

import httpx
import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from tally.config import Settings

SERVICE_NAME = "tally-api"
SERVICE_VERSION = "0.1.0"

# Load balancer health checks are not worth a span each
UNTRACED_URLS = ["/health"]


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise telemetry is
    sent only when OBSERVABILITY__LOGFIRE_TOKEN is set.
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    if settings.environment == "test":
        console: logfire.ConsoleOptions | bool = False
    else:
        console = logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        )

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=console,
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        admission_capacity=settings.admission.capacity,
        dedup_window_ms=settings.admission.dedup_window_ms,
    )


def _request_attributes(request, attributes):
    """Attach the path and caller host to the request span."""
    result = {**attributes, "path": request.url.path}
    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except the untraced health URLs."""
    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_request_attributes,
        excluded_urls=UNTRACED_URLS,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx(client: httpx.AsyncClient) -> None:
    """Trace the sync client's action and user data requests."""
    logfire.instrument_httpx(client)
