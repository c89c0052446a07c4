"""Tests for runtime/agents/fulfillment_agent.py."""

from __future__ import annotations

import json

import pytest

from core.intent.resolver import APOLOGY_TEXT, FALLBACK_TEXT
from exceptions.exceptions import CountsUnavailableError
from runtime.agents.fulfillment_agent import FulfillmentAgent
from runtime.events.event_bus import EventBus
from runtime.store.dashboard_store import LocalDataCounts, StaticCounts
from runtime.store.session_store import SessionStore


class FlakyCounts:
    def __init__(self) -> None:
        self.calls = 0

    def counts(self):
        self.calls += 1
        if self.calls > 1:
            raise CountsUnavailableError("flaky", "down")
        return StaticCounts(orders=4, inventory_items=9).counts()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def events(bus: EventBus):
    received = []
    bus.subscribe(received.append)
    return received


@pytest.fixture()
def agent(bus: EventBus) -> FulfillmentAgent:
    return FulfillmentAgent(
        session_store=SessionStore(),
        event_bus=bus,
        counts_provider=StaticCounts(orders=2, inventory_items=5),
    )


class TestHandle:
    def test_dashboard_records_and_publishes(self, agent, events) -> None:
        body = {
            "session": "projects/shop/agent/sessions/u1",
            "queryResult": {
                "queryText": "open the dashboard",
                "intent": {"displayName": "Dashboard"},
            },
        }

        response = agent.handle(body)

        expected = 'Dashboard is up. Orders: 2, Inventory items: 5. Say "shop status" for more.'
        assert response.fulfillmentText == expected

        entries = agent.session_store.recall("u1")
        assert len(entries) == 1
        assert entries[0].message == "open the dashboard"
        assert entries[0].result == {"fulfillmentText": expected}

        assert len(events) == 1
        assert events[0].type == "fulfillment"
        assert events[0].payload == {"intent": "dashboard", "response": expected}
        assert events[0].user_id == "u1"

    def test_message_defaults_to_intent(self, agent) -> None:
        agent.handle({"intent": "Dashboard", "userId": "u1"})
        assert agent.session_store.recall("u1")[0].message == "dashboard"

    def test_unknown_intent_without_user_skips_recording(self, agent, events) -> None:
        response = agent.handle({})

        assert response.fulfillmentText == FALLBACK_TEXT
        assert agent.session_store.users() == []
        assert events[0].payload == {"intent": "", "response": FALLBACK_TEXT}
        assert events[0].user_id is None

    @pytest.mark.parametrize("body", [None, "garbage", 17, ["intent"]])
    def test_non_mapping_body(self, agent, body) -> None:
        assert agent.handle(body).fulfillmentText == FALLBACK_TEXT

    def test_failing_listener_does_not_change_response(self, agent, bus) -> None:
        def broken(event):
            raise RuntimeError("listener down")

        bus.subscribe(broken)

        response = agent.handle({"intent": "dashboard", "userId": "u1"})
        assert response.fulfillmentText.startswith("Dashboard is up.")

    def test_internal_failure_returns_apology(self, bus, events) -> None:
        class BrokenStore(SessionStore):
            def remember(self, user_id, message, result):
                raise RuntimeError("disk on fire")

        agent = FulfillmentAgent(session_store=BrokenStore(), event_bus=bus)

        response = agent.handle({"intent": "dashboard", "userId": "u1"})

        assert response.fulfillmentText == APOLOGY_TEXT
        assert events == []

    def test_session_file_failure_still_answers(self, tmp_path, bus) -> None:
        path = tmp_path / "sessions.json"
        path.mkdir()
        agent = FulfillmentAgent(session_store=SessionStore(path=str(path)), event_bus=bus)

        response = agent.handle({"intent": "dashboard", "userId": "u1"})

        assert response.fulfillmentText.startswith("Dashboard is up.")
        assert len(agent.session_store.recall("u1")) == 1


class TestCounts:
    def test_no_provider_uses_zero(self, bus) -> None:
        agent = FulfillmentAgent(session_store=SessionStore(), event_bus=bus)
        response = agent.handle({"intent": "dashboard"})
        assert "Orders: 0, Inventory items: 0" in response.fulfillmentText

    def test_provider_failure_uses_last_known(self, bus) -> None:
        agent = FulfillmentAgent(
            session_store=SessionStore(), event_bus=bus, counts_provider=FlakyCounts()
        )

        first = agent.handle({"intent": "dashboard"})
        second = agent.handle({"intent": "dashboard"})

        assert "Orders: 4, Inventory items: 9" in first.fulfillmentText
        assert second.fulfillmentText == first.fulfillmentText

    def test_local_data_counts(self, tmp_path, bus) -> None:
        (tmp_path / "orders.json").write_text(json.dumps([{}, {}, {}]), encoding="utf-8")
        (tmp_path / "inventory.json").write_text(json.dumps([{"sku": "A"}]), encoding="utf-8")
        agent = FulfillmentAgent(
            session_store=SessionStore(),
            event_bus=bus,
            counts_provider=LocalDataCounts(str(tmp_path)),
        )

        response = agent.handle({"intent": "dashboard"})

        assert "Orders: 3, Inventory items: 1" in response.fulfillmentText
