"""
Shared objects for one running assistant process.

Everything that holds state (session log, event bus, probe cache) is built
here once and handed to the consumers that need it, instead of living in
module-level globals.
"""

from dataclasses import dataclass
from typing import Callable, List

from configs.settings import Settings
from .agents.fulfillment_agent import FulfillmentAgent
from .events.event_bus import EventBus
from .events.sinks import LoggingEventSink, RecentEventsFeed
from .probe.rag_availability import AvailabilityProbe
from .store.dashboard_store import CountsProvider, LocalDataCounts
from .store.session_store import SessionStore


@dataclass
class AssistantContext:
    settings: Settings
    session_store: SessionStore
    event_bus: EventBus
    rag_probe: AvailabilityProbe
    counts_provider: CountsProvider
    recent_events: RecentEventsFeed
    fulfillment_agent: FulfillmentAgent
    unsubscribers: List[Callable[[], None]]

    def close(self) -> None:
        """Detach the sinks registered by build_context."""
        for unsubscribe in self.unsubscribers:
            unsubscribe()
        self.unsubscribers.clear()


def build_context(settings: Settings) -> AssistantContext:
    """Construct the session store, bus, probe and agent from settings."""
    session_store = SessionStore(
        path=str(settings.sessions_path),
        hydrate=settings.hydrate_sessions,
    )
    event_bus = EventBus()
    recent_events = RecentEventsFeed(maxlen=settings.recent_events)
    unsubscribers = [
        event_bus.subscribe(LoggingEventSink()),
        event_bus.subscribe(recent_events),
    ]

    rag_probe = AvailabilityProbe(
        url=settings.chroma_url,
        collection=settings.chroma_collection,
        timeout_seconds=settings.rag_timeout_seconds,
    )
    counts_provider = LocalDataCounts(data_dir=str(settings.data_dir))

    fulfillment_agent = FulfillmentAgent(
        session_store=session_store,
        event_bus=event_bus,
        counts_provider=counts_provider,
    )

    return AssistantContext(
        settings=settings,
        session_store=session_store,
        event_bus=event_bus,
        rag_probe=rag_probe,
        counts_provider=counts_provider,
        recent_events=recent_events,
        fulfillment_agent=fulfillment_agent,
        unsubscribers=unsubscribers,
    )
