"""
HGS Event Bus — Event Journal
================================
Append-only record of every successful transition on one governed
equipment instance.

RULES:
- Events are appended, never modified or removed
- Sequence numbers start at 1 and have no gaps
- Only registered event types may be recorded
- Recording an event dispatches it to subscribers; subscriber failure
  never removes the event
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Iterable, Optional

from core.events.dispatcher import dispatch
from core.events.errors import UnknownEventTypeError
from core.events.registry import SubscriberRegistry, validate_event_type_format
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("hgs.events")


# ══════════════════════════════════════════════════════════════
# EVENT RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Event:
    """
    An externally observable fact attached to a successful transition.

    Fields:
        event_id:      Unique identifier.
        sequence:      Position in the journal (1-based, gapless).
        event_type:    engine.domain.action.vN
        source_engine: First segment of event_type.
        actor:         Identity of the caller whose call produced it.
        payload:       Event-specific data.
        occurred_at:   Clock time of the transition.
    """

    event_id: uuid.UUID
    sequence: int
    event_type: str
    source_engine: str
    actor: str
    payload: dict = field(default_factory=dict)
    occurred_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "event_id": str(self.event_id),
            "sequence": self.sequence,
            "event_type": self.event_type,
            "source_engine": self.source_engine,
            "actor": self.actor,
            "payload": dict(self.payload),
            "occurred_at": (
                self.occurred_at.isoformat() if self.occurred_at else None
            ),
        }


# ══════════════════════════════════════════════════════════════
# EVENT JOURNAL
# ══════════════════════════════════════════════════════════════

class EventJournal:
    """
    In-memory, append-only event journal with subscriber dispatch.

    Usage:
        journal = EventJournal(clock=FixedClock(...))
        journal.register_event_types(["maintenance.work.announced.v1"])
        journal.subscribers.register_subscriber(
            "maintenance.work.announced.v1", on_announced, "scheduler",
        )
        journal.record(
            "maintenance.work.announced.v1", actor="0xT1ME", payload={},
        )
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        subscribers: Optional[SubscriberRegistry] = None,
    ):
        self._clock = clock if clock is not None else SystemClock()
        self._subscribers = (
            subscribers if subscribers is not None else SubscriberRegistry()
        )
        self._events: list[Event] = []
        self._event_types: set[str] = set()
        self._lock = Lock()

    # ── vocabulary ────────────────────────────────────────────

    def register_event_type(self, event_type: str) -> None:
        validate_event_type_format(event_type)
        with self._lock:
            self._event_types.add(event_type)

    def register_event_types(self, event_types: Iterable[str]) -> None:
        for event_type in sorted(event_types):
            self.register_event_type(event_type)

    def is_registered(self, event_type: str) -> bool:
        with self._lock:
            return event_type in self._event_types

    @property
    def event_types(self) -> frozenset:
        with self._lock:
            return frozenset(self._event_types)

    # ── recording ─────────────────────────────────────────────

    def record(self, event_type: str, actor: str, payload: dict) -> Event:
        """
        Append an event and dispatch it to subscribers.

        Raises:
            UnknownEventTypeError: event_type was never registered.
        """
        with self._lock:
            if event_type not in self._event_types:
                raise UnknownEventTypeError(event_type)

            event = Event(
                event_id=uuid.uuid4(),
                sequence=len(self._events) + 1,
                event_type=event_type,
                source_engine=event_type.split(".")[0],
                actor=actor,
                payload=dict(payload),
                occurred_at=self._clock.now_utc(),
            )
            self._events.append(event)

        logger.debug(
            f"Event recorded: #{event.sequence} {event_type} "
            f"(actor: {actor})"
        )

        dispatch(event, self._subscribers)
        return event

    # ── queries ───────────────────────────────────────────────

    def events(self, event_type: Optional[str] = None) -> tuple[Event, ...]:
        with self._lock:
            if event_type is None:
                return tuple(self._events)
            return tuple(e for e in self._events if e.event_type == event_type)

    def last(self, event_type: Optional[str] = None) -> Optional[Event]:
        matching = self.events(event_type)
        return matching[-1] if matching else None

    def count(self, event_type: Optional[str] = None) -> int:
        return len(self.events(event_type))

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    @property
    def subscribers(self) -> SubscriberRegistry:
        return self._subscribers
