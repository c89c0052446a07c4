"""
FastAPI application entry point for the Easly assistant runtime.

Responsibilities:
- build the AssistantContext (SessionStore, EventBus, AvailabilityProbe,
  FulfillmentAgent) from settings
- attach it to the app so route handlers can reach it
- include the assistant routes

Run locally with:

    uvicorn runtime.api.server:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from configs.logging_config import configure_logging
from configs.settings import settings
from ..context import AssistantContext, build_context
from . import assistant_routes


def create_app(context: Optional[AssistantContext] = None) -> FastAPI:
    """Create the FastAPI app around an existing or freshly built context."""
    if context is None:
        context = build_context(settings)

    app = FastAPI(title="Easly Assistant Runtime")
    app.state.context = context
    app.include_router(assistant_routes.router)
    return app


# ---------------------------------------------------------------------------
# Default app for uvicorn
# ---------------------------------------------------------------------------

configure_logging(settings.log_level)
app = create_app()
