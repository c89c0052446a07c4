"""HTTP routes for the Easly assistant runtime.

Exposes endpoints like:

- POST /fulfillment          -> webhook from the NLU front-end; always
                                answers {"fulfillmentText": ...}
- GET  /ai/health            -> liveness plus the cached RAG probe result
- GET  /ai/rag               -> RAG probe result (?force=true re-checks)
- GET  /ai/events/recent     -> latest assistant events for the dashboard
- GET  /sessions/{user_id}   -> a user's recorded exchanges
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from core.intent.models import FulfillmentResponse
from ..context import AssistantContext
from ..models.api_models import AvailabilityResult, HealthResponse, RecentEventsResponse
from ..models.session_models import SessionHistory


logger = logging.getLogger(__name__)

# Router for all assistant endpoints
router = APIRouter()


def _require_context(request: Request) -> AssistantContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(
            status_code=500,
            detail="AssistantContext is not configured on the server.",
        )
    return context


@router.post("/fulfillment", response_model=FulfillmentResponse)
async def fulfillment(request: Request) -> FulfillmentResponse:
    """Handle one webhook call from the NLU front-end.

    The body is parsed here rather than by FastAPI so that an unparsable
    payload still gets a 200 with the fallback reply instead of a 422.
    """
    context = _require_context(request)

    body: Any = None
    try:
        body = await request.json()
    except ValueError:
        logger.debug("[FULFILLMENT] Body is not JSON; treating as empty request")

    # handle() writes the sessions file; keep that off the event loop.
    return await run_in_threadpool(context.fulfillment_agent.handle, body)


@router.get("/ai/health", response_model=HealthResponse)
async def ai_health(request: Request) -> HealthResponse:
    context = _require_context(request)
    rag = await context.rag_probe.check()
    context.event_bus.publish("health", {"rag_available": rag.available})
    return HealthResponse(ok=True, rag=rag)


@router.get("/ai/rag", response_model=AvailabilityResult)
async def ai_rag(request: Request, force: bool = False) -> AvailabilityResult:
    context = _require_context(request)
    return await context.rag_probe.check(force=force)


@router.get("/ai/events/recent", response_model=RecentEventsResponse)
def recent_events(request: Request, user_id: Optional[str] = None) -> RecentEventsResponse:
    context = _require_context(request)
    return RecentEventsResponse(events=context.recent_events.recent(user_id))


@router.get("/sessions/{user_id}", response_model=SessionHistory)
def session_history(request: Request, user_id: str) -> SessionHistory:
    context = _require_context(request)
    return SessionHistory(userId=user_id, entries=context.session_store.recall(user_id))


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
