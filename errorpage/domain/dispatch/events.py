"""
In-process event manager for dispatch errors.

Listeners are attached under named hooks and invoked in priority order:

    events = EventManager()
    strategy.attach(events)                  # dispatch.error + render.error
    events.attach(LOG_EXCEPTION, reporter)   # error tracker(s)

    final = events.trigger_error(ErrorEvent(DISPATCH_ERROR, ...))

``trigger`` collects listener return values. ``trigger_error`` folds each
listener's ErrorOutcome into the event, so a listener sees the result and
response left by the ones that ran before it.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from errorpage.domain.dispatch.entities import ErrorEvent, ErrorOutcome

logger = logging.getLogger(__name__)

DISPATCH_ERROR = "dispatch.error"
RENDER_ERROR = "render.error"
LOG_EXCEPTION = "log.exception"

Listener = Callable[..., Any]


# ══════════════════════════════════════════════════════════════════════
# Data structures
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ListenerHandle:
    """Returned by ``attach``; pass it to ``detach`` to unregister."""

    event_name: str
    listener: Listener
    priority: int
    sequence: int


@dataclass
class ResponseCollection:
    """Return values of every listener invoked by a trigger, in call order."""

    responses: list[Any] = field(default_factory=list)

    def first(self) -> Any:
        return self.responses[0] if self.responses else None

    def last(self) -> Any:
        return self.responses[-1] if self.responses else None

    def is_empty(self) -> bool:
        return not self.responses

    def __len__(self) -> int:
        return len(self.responses)

    def __iter__(self):
        return iter(self.responses)


# ══════════════════════════════════════════════════════════════════════
# Event manager
# ══════════════════════════════════════════════════════════════════════


class EventManager:
    """Registry of listeners keyed by hook name.

    Higher priority listeners run first; equal priorities run in the
    order they were attached.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[ListenerHandle]] = {}
        self._sequence = itertools.count()

    def attach(
        self, event_name: str, listener: Listener, priority: int = 1
    ) -> ListenerHandle:
        """Register a listener under a hook name.

        Raises:
            TypeError: If the listener is not callable.
        """
        if not callable(listener):
            msg = f"Listener for {event_name!r} is not callable: {listener!r}"
            raise TypeError(msg)
        handle = ListenerHandle(
            event_name=event_name,
            listener=listener,
            priority=priority,
            sequence=next(self._sequence),
        )
        self._listeners.setdefault(event_name, []).append(handle)
        logger.debug("Listener attached to %s (priority=%d)", event_name, priority)
        return handle

    def detach(self, handle: ListenerHandle) -> bool:
        """Unregister a listener. Returns False if it was not attached."""
        handles = self._listeners.get(handle.event_name, [])
        if handle not in handles:
            return False
        handles.remove(handle)
        if not handles:
            del self._listeners[handle.event_name]
        return True

    def listeners(self, event_name: str) -> list[Listener]:
        """Listeners for a hook, in invocation order."""
        handles = sorted(
            self._listeners.get(event_name, []),
            key=lambda h: (-h.priority, h.sequence),
        )
        return [h.listener for h in handles]

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def trigger(self, event_name: str, *args: Any, **kwargs: Any) -> ResponseCollection:
        """Invoke every listener for a hook and collect what they return.

        Listener errors propagate to the caller.
        """
        collection = ResponseCollection()
        for listener in self.listeners(event_name):
            collection.responses.append(listener(*args, **kwargs))
        return collection

    def trigger_error(self, event: ErrorEvent) -> ErrorEvent:
        """Run the listeners for ``event.name`` and return the final event.

        A listener returning an ErrorOutcome replaces the event's result
        and response for the listeners after it. Other return values
        leave the event untouched.
        """
        for listener in self.listeners(event.name):
            outcome: Optional[Any] = listener(event)
            if isinstance(outcome, ErrorOutcome):
                event = event.with_outcome(outcome)
        return event
