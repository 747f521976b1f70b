"""
NoteKeeper Backend - Request Tracing
=====================================

What:  OpenTelemetry server spans for the HTTP routes.
How:   FastAPIInstrumentor wraps the app and records one span per request
       into a TracerProvider, either the one handed in or one built here
       from settings.
Who:   create_app() at build time; the lifespan shuts the provider down.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from notekeeper import __version__
from notekeeper.config import settings

logger = logging.getLogger(__name__)

# Comma-separated patterns, searched in the request URL
EXCLUDED_URLS = "/health"


def build_tracer_provider() -> TracerProvider:
    """Provider tagged with the service name; exports to stdout if asked."""
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.tracing_service_name,
                "service.version": __version__,
            }
        )
    )
    if settings.tracing_console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    return provider


def setup_tracing(
    app: FastAPI,
    tracer_provider: Optional[TracerProvider] = None,
) -> Optional[TracerProvider]:
    """
    Instrument `app` and remember the provider on ``app.state``.

    An explicit provider is always used. Without one, tracing follows
    TRACING_ENABLED.

    Returns:
        The provider in use, or None when tracing is off.
    """
    if tracer_provider is None:
        if not settings.tracing_enabled:
            app.state.tracer_provider = None
            return None
        tracer_provider = build_tracer_provider()

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        excluded_urls=EXCLUDED_URLS,
    )
    app.state.tracer_provider = tracer_provider
    logger.debug("OpenTelemetry instrumentation enabled for %s", app.title)
    return tracer_provider


def shutdown_tracing(app: FastAPI) -> None:
    provider = getattr(app.state, "tracer_provider", None)
    if provider is not None:
        provider.shutdown()
