"""
Request/response shapes for the fulfillment webhook.

Inbound bodies arrive in one of two shapes:

    {"queryResult": {"intent": {"displayName": "Dashboard"}}}   # NLU platform
    {"intent": "dashboard"}                                     # direct call

Both are converted at the boundary into a single FulfillmentRequest,
tagged with the shape it came from, so the resolver never touches raw
JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel


def _dig(body: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None on any missing or malformed level."""
    current = body
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _user_from_session_path(session: Optional[str]) -> Optional[str]:
    # projects/<project>/agent/sessions/<session-id>
    if not session:
        return None
    tail = session.rstrip("/").rsplit("/", 1)[-1]
    return tail or None


class FulfillmentRequest(BaseModel):
    """Canonical form of an inbound webhook body."""

    source: Literal["nlu", "direct"]
    nlu_intent: Optional[str] = None
    direct_intent: Optional[str] = None
    query_text: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_body(cls, body: Any) -> "FulfillmentRequest":
        """Convert a raw JSON body into a FulfillmentRequest.

        Never raises: anything that is not a mapping, or fields of the
        wrong type, are treated as absent.
        """
        if not isinstance(body, Mapping):
            return cls(source="direct")

        source = "nlu" if isinstance(body.get("queryResult"), Mapping) else "direct"

        query_text = (
            _as_text(_dig(body, "queryResult", "queryText"))
            or _as_text(body.get("query"))
            or _as_text(body.get("text"))
        )

        user_id = (
            _as_text(body.get("userId"))
            or _as_text(body.get("sessionId"))
            or _user_from_session_path(_as_text(body.get("session")))
            or _as_text(
                _dig(body, "originalDetectIntentRequest", "payload", "user", "userId")
            )
        )

        return cls(
            source=source,
            nlu_intent=_as_text(_dig(body, "queryResult", "intent", "displayName")),
            direct_intent=_as_text(body.get("intent")),
            query_text=query_text,
            user_id=user_id,
        )


class FulfillmentResponse(BaseModel):
    fulfillmentText: str


@dataclass(frozen=True)
class DashboardCounts:
    """Order / inventory totals shown in the dashboard status reply."""

    orders: int = 0
    inventory_items: int = 0
