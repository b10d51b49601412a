"""Module events: registry change notifications."""
#
# PURPOSE:
# Decouples the registry (which knows when services come and go) from the
# consumers that must react (the document cache).
#
# LOGIC:
# - RegistryEventBus: synchronous observable, one per application state.
# - Every event carries a monotonically increasing sequence number so
#   consumers can tell notifications apart in logs.
#

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

_sequence = itertools.count(1)


def get_next_sequence() -> int:
    return next(_sequence)


class RegistryEventType(str, Enum):
    """
    Taxonomy of registry events.
    """
    SERVICES_CHANGED = "$services.changed"
    SERVICE_REGISTERED = "$service.registered"
    SERVICE_UNREGISTERED = "$service.unregistered"


@dataclass
class RegistryEvent:
    """
    Event record.

    Fields:
        type: Event classification from RegistryEventType
        payload: Event-specific data (service name, local flag, ...)
        timestamp: When the event occurred (epoch time)
        sequence: Process-wide monotonically increasing number
    """
    type: RegistryEventType
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    sequence: int = field(default_factory=get_next_sequence)


Subscriber = Callable[[RegistryEvent], None]


class RegistryEventBus:
    """
    Synchronous event bus for registry notifications.
    """
    def __init__(self):
        self._subscribers: List[Tuple[Subscriber, Optional[Set[RegistryEventType]]]] = []
        self._last_sequence: int = 0

    def subscribe(
        self,
        callback: Subscriber,
        event_types: Optional[Iterable[RegistryEventType]] = None,
    ) -> Callable[[], None]:
        """
        Register a callback, optionally restricted to some event types.

        Returns:
            A function that removes the subscription when called.
        """
        types = set(event_types) if event_types is not None else None
        entry = (callback, types)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    @property
    def last_sequence(self) -> int:
        """Sequence number of the last emitted event."""
        return self._last_sequence

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, event: RegistryEvent) -> None:
        """Broadcast event to all matching subscribers."""
        self._last_sequence = event.sequence

        for callback, types in list(self._subscribers):
            if types is not None and event.type not in types:
                continue
            try:
                callback(event)
            except Exception as e:
                logger.error(f"[RegistryEventBus] Subscriber failed on {event.type.value}: {e}")

    # --- Convenience Methods ---

    def emit_services_changed(self, local_service: bool = True) -> None:
        self.emit(RegistryEvent(
            type=RegistryEventType.SERVICES_CHANGED,
            payload={"localService": local_service},
        ))

    def emit_service_registered(self, name: str) -> None:
        self.emit(RegistryEvent(
            type=RegistryEventType.SERVICE_REGISTERED,
            payload={"service": name},
        ))

    def emit_service_unregistered(self, name: str) -> None:
        self.emit(RegistryEvent(
            type=RegistryEventType.SERVICE_UNREGISTERED,
            payload={"service": name},
        ))
