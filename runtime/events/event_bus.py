"""In-process publish/subscribe channel for assistant activity.

Producers (the fulfillment agent, health checks) call `publish`; consumers
(dashboard feed, logging sink) register with `subscribe`. Delivery is
synchronous, in subscription order, and isolated per listener: a listener
that raises is logged and the remaining listeners still run.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    ts: str  # ISO-8601, UTC
    type: str
    payload: Any = None
    user_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ts": self.ts,
            "type": self.type,
            "payload": self.payload,
            "userId": self.user_id,
        }


Listener = Callable[[Event], None]
Unsubscribe = Callable[[], None]


class _Subscription:
    __slots__ = ("listener", "active")

    def __init__(self, listener: Listener) -> None:
        self.listener = listener
        self.active = True


class EventBus:
    """Explicit list of subscriptions plus a dispatch routine."""

    def __init__(self) -> None:
        self._subscriptions: List[_Subscription] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register `listener` and return a callable that removes it.

        Each call creates an independent registration, so subscribing the
        same function twice delivers twice. The returned callable removes
        only its own registration; calling it again does nothing.
        """
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if not subscription.active:
                return
            subscription.active = False
            self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, type: str, payload: Any = None, user_id: Optional[str] = None) -> Event:
        """Build an Event and deliver it to the current listeners."""
        event = Event(
            ts=datetime.now(timezone.utc).isoformat(),
            type=type,
            payload=payload,
            user_id=user_id,
        )

        # Listeners subscribed during dispatch wait for the next event.
        for subscription in list(self._subscriptions):
            if not subscription.active:
                continue
            try:
                subscription.listener(event)
            except Exception:
                logger.exception(
                    "[EVENTS] Listener %r failed on %s event", subscription.listener, type
                )

        return event

    def listener_count(self) -> int:
        return len(self._subscriptions)
