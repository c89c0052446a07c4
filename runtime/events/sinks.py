"""Event Bus consumers used by the server.

- LoggingEventSink: writes every event to the application log.
- RecentEventsFeed: keeps the latest events for the dashboard activity feed.
"""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from .event_bus import Event


logger = logging.getLogger(__name__)


class LoggingEventSink:
    """Log sink used during local development and in production logs."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def __call__(self, event: Event) -> None:
        self._log.info(
            "[EVENT] %s user=%s payload=%r", event.type, event.user_id, event.payload
        )


class RecentEventsFeed:
    """Bounded, newest-first view of recent events."""

    def __init__(self, maxlen: int = 20) -> None:
        self._events: Deque[Event] = deque(maxlen=maxlen)

    def __call__(self, event: Event) -> None:
        self._events.appendleft(event)

    def recent(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return [
            event.to_dict()
            for event in self._events
            if user_id is None or event.user_id == user_id
        ]
