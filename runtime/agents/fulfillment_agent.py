"""FulfillmentAgent implementation.

Responsible for:
- turning a raw webhook body into a FulfillmentRequest
- resolving the intent and the text to speak back
- recording the exchange in the SessionStore (when a user is known)
- publishing a "fulfillment" event on the EventBus

Whatever goes wrong inside, the caller always gets a FulfillmentResponse:
either the resolved reply or a fixed apology.
"""

import logging
from typing import Any, Optional

from core.intent.models import DashboardCounts, FulfillmentRequest, FulfillmentResponse
from core.intent.resolver import apology_response, build_response, resolve_intent
from exceptions.exceptions import CountsUnavailableError

from ..events.event_bus import EventBus
from ..store.dashboard_store import CountsProvider
from ..store.session_store import SessionStore


logger = logging.getLogger(__name__)

FULFILLMENT_EVENT = "fulfillment"


class FulfillmentAgent:
    """Webhook fulfillment logic for the Easly assistant.

    Parameters
    ----------
    session_store:
        Store used to record each (message, response) exchange.
    event_bus:
        Bus on which a "fulfillment" event is published per handled request.
    counts_provider:
        Optional source of dashboard counts. When absent, or when it fails,
        the last counts seen (initially zero) are used.
    """

    def __init__(
        self,
        session_store: SessionStore,
        event_bus: EventBus,
        counts_provider: Optional[CountsProvider] = None,
    ):
        self.session_store = session_store
        self.event_bus = event_bus
        self.counts_provider = counts_provider
        self._last_counts = DashboardCounts()

    def handle(self, body: Any) -> FulfillmentResponse:
        """Handle one webhook call. Never raises.

        Flow:
        - convert body -> FulfillmentRequest
        - resolve intent -> response text
        - remember(user_id, message, response) if a user id is known
        - publish "fulfillment" event
        - return response (or the apology on any failure above)
        """
        try:
            request = FulfillmentRequest.from_body(body)
            intent = resolve_intent(request)
            response = build_response(intent, self._current_counts())

            # (1) Record the exchange; the store contains its own write failures.
            if request.user_id:
                self.session_store.remember(
                    request.user_id,
                    request.query_text or intent,
                    response.model_dump(),
                )
            else:
                logger.debug("[FULFILLMENT] No user id in request; skipping session record")

            # (2) Notify in-process listeners.
            self.event_bus.publish(
                FULFILLMENT_EVENT,
                {"intent": intent, "response": response.fulfillmentText},
                request.user_id,
            )
            return response

        except Exception:
            logger.exception("[FULFILLMENT] Error handling webhook request")
            return apology_response()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _current_counts(self) -> DashboardCounts:
        """Fetch fresh counts, falling back to the last known ones."""
        if self.counts_provider is None:
            return self._last_counts

        try:
            self._last_counts = self.counts_provider.counts()
        except CountsUnavailableError as exc:
            logger.warning("[FULFILLMENT] Using last known counts: %s", exc)

        return self._last_counts
