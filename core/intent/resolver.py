# intent/resolver.py
"""
Intent resolution for the fulfillment webhook.

Two pure steps:

1. resolve_intent(request) -> canonical intent string
   - queryResult.intent.displayName wins when present and non-empty
   - otherwise the direct "intent" field
   - otherwise ""
   Matching against known intents is case-insensitive.

2. build_response(intent, counts) -> FulfillmentResponse
   - "dashboard" -> status line with order / inventory counts
   - anything else -> fixed fallback text

Neither step performs I/O; counts are supplied by the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Union

from core.intent.models import DashboardCounts, FulfillmentRequest, FulfillmentResponse


DASHBOARD_INTENT = "dashboard"

DASHBOARD_TEMPLATE = (
    "Dashboard is up. Orders: {orders}, Inventory items: {inventory_items}. "
    'Say "shop status" for more.'
)
FALLBACK_TEXT = "Unhandled intent. Try saying: dashboard."
APOLOGY_TEXT = "Sorry, there was an error handling your request."


def _dashboard_text(counts: DashboardCounts) -> str:
    return DASHBOARD_TEMPLATE.format(
        orders=counts.orders,
        inventory_items=counts.inventory_items,
    )


# intent -> renderer(counts) -> fulfillment text
KNOWN_INTENTS: Dict[str, Callable[[DashboardCounts], str]] = {
    DASHBOARD_INTENT: _dashboard_text,
}


def resolve_intent(request: Union[FulfillmentRequest, Mapping[str, Any], None]) -> str:
    """Return the canonical (lower-cased) intent for a request.

    Accepts either an already-converted FulfillmentRequest or a raw JSON
    body in one of the two supported shapes.
    """
    if not isinstance(request, FulfillmentRequest):
        request = FulfillmentRequest.from_body(request)

    candidate = request.nlu_intent or request.direct_intent or ""
    return candidate.lower()


def build_response(
    intent: str,
    counts: Optional[DashboardCounts] = None,
) -> FulfillmentResponse:
    """Map a canonical intent to the text spoken back to the user."""
    renderer = KNOWN_INTENTS.get(intent.lower())
    if renderer is None:
        return FulfillmentResponse(fulfillmentText=FALLBACK_TEXT)
    return FulfillmentResponse(fulfillmentText=renderer(counts or DashboardCounts()))


def apology_response() -> FulfillmentResponse:
    return FulfillmentResponse(fulfillmentText=APOLOGY_TEXT)
