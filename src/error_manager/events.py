from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Union

from .exceptions import ArgumentTypeError, ConfigurationError

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Notifications an ErrorManager sends to its observers."""

    # Once, after the first successful load: {file, count}
    INITIALIZED = "initialized"
    # After every rendered message: {title, body} plus method/arg when set
    MESSAGE = "message"


@dataclass(frozen=True)
class Event:
    type: EventType
    payload: Mapping[str, Any]

    @property
    def name(self) -> str:
        return self.type.value


Observer = Callable[[Event], None]


def _event_type(event: Union[str, EventType]) -> EventType:
    try:
        return EventType(event)
    except ValueError:
        known = ", ".join(e.value for e in EventType)
        raise ConfigurationError(
            f"Unknown event '{event}' (expected one of: {known})",
            context={"event": str(event)},
        ) from None


class Observers:
    """Observer list owned by one ErrorManager.

    Only the EventType names are accepted. Callbacks run synchronously, in
    registration order, on the thread that loaded or rendered.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[EventType, List[Observer]] = {e: [] for e in EventType}

    def add(self, event: Union[str, EventType], callback: Observer) -> None:
        if not callable(callback):
            raise ArgumentTypeError("callback should be callable", context={"type": type(callback).__name__})
        self._callbacks[_event_type(event)].append(callback)

    def remove(self, event: Union[str, EventType], callback: Observer) -> None:
        callbacks = self._callbacks[_event_type(event)]
        if callback in callbacks:
            callbacks.remove(callback)

    def count(self, event: Union[str, EventType]) -> int:
        return len(self._callbacks[_event_type(event)])

    def notify(self, event: EventType, payload: Mapping[str, Any]) -> None:
        """Deliver ``payload`` to every observer of ``event``.

        An observer that raises is logged; the remaining observers still run
        and the triggering operation still succeeds.
        """
        callbacks = list(self._callbacks[event])
        if not callbacks:
            return
        notice = Event(type=event, payload=dict(payload))
        for callback in callbacks:
            try:
                callback(notice)
            except Exception:
                logger.exception("Observer %r failed on '%s'", callback, event.value)


__all__ = [
    "Event",
    "EventType",
    "Observer",
    "Observers",
]
