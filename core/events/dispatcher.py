"""
HGS Event Bus — Dispatcher
============================
Hands a recorded event to its subscribers, in registration order.

A subscriber that raises is logged and reported; the remaining
subscribers still run, and the state change that produced the event
stands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from core.events.registry import SubscriberRegistry

logger = logging.getLogger("hgs.events")


@dataclass(frozen=True)
class SubscriberFailure:
    subscriber: str
    handler: str
    error_type: str
    error: str


@dataclass(frozen=True)
class DispatchReport:
    event_type: str
    sequence: int
    notified: int = 0
    failures: tuple[SubscriberFailure, ...] = ()

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


def dispatch(event: Any, registry: SubscriberRegistry) -> DispatchReport:
    """Notify every subscriber of event.event_type. Never raises."""
    subscribers = registry.get_subscribers(event.event_type)
    notified = 0
    failures = []

    for handler, subscriber in subscribers:
        try:
            handler(event)
        except Exception as exc:
            handler_name = getattr(handler, "__qualname__", repr(handler))
            failures.append(SubscriberFailure(
                subscriber=subscriber,
                handler=handler_name,
                error_type=type(exc).__name__,
                error=str(exc),
            ))
            logger.error(
                f"Subscriber '{subscriber}' ({handler_name}) failed on "
                f"#{event.sequence} {event.event_type}: {exc}",
                exc_info=True,
            )
        else:
            notified += 1

    if subscribers:
        logger.debug(
            f"Dispatched #{event.sequence} {event.event_type}: "
            f"{notified} notified, {len(failures)} failed"
        )

    return DispatchReport(
        event_type=event.event_type,
        sequence=event.sequence,
        notified=notified,
        failures=tuple(failures),
    )
