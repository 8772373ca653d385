"""
Committed-event log.

The ``Pool`` publishes a call's events only after the call commits. A failing
subscriber is logged and skipped; it cannot undo a committed call.

The in-memory list is a test and debug sink. Long-running processes should
pass ``max_events`` (only the most recent events are kept) and rely on
subscribers for delivery.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .types import PoolEvent, event_to_dict

logger = logging.getLogger(__name__)

Subscriber = Callable[[PoolEvent], None]


class EventLog:
    def __init__(self, *, max_events: Optional[int] = None) -> None:
        if max_events is not None and max_events <= 0:
            raise ValueError(f"max_events must be positive: {max_events}")
        self.max_events = max_events
        self.events: List[PoolEvent] = []
        self._subscribers: List[Subscriber] = []

    def subscribe(self, fn: Subscriber) -> None:
        self._subscribers.append(fn)

    def publish(self, events: Iterable[PoolEvent]) -> None:
        for ev in events:
            self.events.append(ev)
            if self.max_events is not None and len(self.events) > self.max_events:
                del self.events[0]
            logger.debug("event %s", event_to_dict(ev))
            for fn in self._subscribers:
                try:
                    fn(ev)
                except Exception:
                    logger.exception("event subscriber %r failed on %s", fn, ev.event.value)

    def __len__(self) -> int:
        return len(self.events)
