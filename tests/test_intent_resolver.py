"""Tests for core/intent: request conversion and pure intent resolution."""

from __future__ import annotations

import pytest

from core.intent.models import DashboardCounts, FulfillmentRequest
from core.intent.resolver import (
    FALLBACK_TEXT,
    build_response,
    resolve_intent,
)


DASHBOARD_ZERO = (
    'Dashboard is up. Orders: 0, Inventory items: 0. Say "shop status" for more.'
)


class TestResolveIntent:
    @pytest.mark.parametrize("name", ["Dashboard", "dashboard", "DASHBOARD", "dAsHbOaRd"])
    def test_nlu_display_name_any_casing(self, name: str) -> None:
        body = {"queryResult": {"intent": {"displayName": name}}}
        assert resolve_intent(body) == "dashboard"
        assert build_response(resolve_intent(body)).fulfillmentText == DASHBOARD_ZERO

    def test_direct_shape(self) -> None:
        assert resolve_intent({"intent": "Dashboard"}) == "dashboard"

    def test_nlu_field_wins_over_direct(self) -> None:
        body = {"queryResult": {"intent": {"displayName": "OrderStatus"}}, "intent": "dashboard"}
        assert resolve_intent(body) == "orderstatus"

    def test_empty_nlu_field_falls_back_to_direct(self) -> None:
        body = {"queryResult": {"intent": {"displayName": ""}}, "intent": "dashboard"}
        assert resolve_intent(body) == "dashboard"

    @pytest.mark.parametrize(
        "body",
        [
            None,
            {},
            [],
            "dashboard",
            {"queryResult": None},
            {"queryResult": {"intent": "not-a-mapping"}},
            {"queryResult": {"intent": {"displayName": 42}}},
            {"intent": None},
            {"intent": ["dashboard"]},
        ],
    )
    def test_missing_or_malformed_fields_resolve_empty(self, body) -> None:
        assert resolve_intent(body) == ""
        assert build_response(resolve_intent(body)).fulfillmentText == FALLBACK_TEXT

    def test_accepts_converted_request(self) -> None:
        request = FulfillmentRequest(source="direct", direct_intent="DashBoard")
        assert resolve_intent(request) == "dashboard"


class TestBuildResponse:
    def test_dashboard_uses_supplied_counts(self) -> None:
        response = build_response("dashboard", DashboardCounts(orders=3, inventory_items=12))
        assert response.fulfillmentText == (
            'Dashboard is up. Orders: 3, Inventory items: 12. Say "shop status" for more.'
        )

    def test_unknown_intent_lists_an_example(self) -> None:
        response = build_response("shop-status")
        assert response.fulfillmentText == FALLBACK_TEXT
        assert "dashboard" in response.fulfillmentText


class TestFulfillmentRequestFromBody:
    def test_tags_nlu_shape(self) -> None:
        request = FulfillmentRequest.from_body(
            {
                "session": "projects/shop/agent/sessions/abc-123",
                "queryResult": {
                    "queryText": "how is the shop doing",
                    "intent": {"displayName": "Dashboard"},
                },
            }
        )
        assert request.source == "nlu"
        assert request.nlu_intent == "Dashboard"
        assert request.query_text == "how is the shop doing"
        assert request.user_id == "abc-123"

    def test_tags_direct_shape(self) -> None:
        request = FulfillmentRequest.from_body({"intent": "dashboard", "userId": "u1"})
        assert request.source == "direct"
        assert request.direct_intent == "dashboard"
        assert request.user_id == "u1"
        assert request.query_text is None

    def test_user_id_precedence(self) -> None:
        request = FulfillmentRequest.from_body(
            {"userId": "explicit", "sessionId": "s1", "session": "a/b/c"}
        )
        assert request.user_id == "explicit"

    def test_user_id_from_detect_intent_payload(self) -> None:
        request = FulfillmentRequest.from_body(
            {"originalDetectIntentRequest": {"payload": {"user": {"userId": "g-42"}}}}
        )
        assert request.user_id == "g-42"

    def test_no_user_id(self) -> None:
        assert FulfillmentRequest.from_body({"intent": "dashboard"}).user_id is None
