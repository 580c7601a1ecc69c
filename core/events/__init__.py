"""
HGS Event Bus — Public API
============================
The journal seals truth. The dispatcher distributes truth.
Truth must exist before it is heard.
"""

from core.events.dispatcher import DispatchReport, SubscriberFailure, dispatch
from core.events.errors import (
    DuplicateSubscriberError,
    EventBusError,
    InvalidEventTypeFormat,
    SelfSubscriptionError,
    UnknownEventTypeError,
)
from core.events.journal import Event, EventJournal
from core.events.registry import SubscriberRegistry

__all__ = [
    "dispatch",
    "DispatchReport",
    "SubscriberFailure",
    "Event",
    "EventJournal",
    "SubscriberRegistry",
    "EventBusError",
    "InvalidEventTypeFormat",
    "UnknownEventTypeError",
    "DuplicateSubscriberError",
    "SelfSubscriptionError",
]
