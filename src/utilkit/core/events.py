"""Process-wide synchronous event bus.

Handlers subscribe per event type and receive every posted event whose class
is that type or a subclass of it. The bus is a lazily created singleton; the
thread enforcer guarding it must be chosen before the first ``get_event_bus()``.

Usage:
    >>> bus = get_event_bus()
    >>> bus.subscribe(LevelSaved, on_level_saved)
    >>> bus.post(LevelSaved(level_id=3))
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Protocol, Type

from utilkit.core.exceptions import EventBusError
from utilkit.core.logger import get_logger

Handler = Callable[[Any], None]


class ThreadEnforcer(Protocol):
    def enforce(self, bus: "EventBus") -> None:
        ...


class AnyThreadEnforcer:
    """Allows bus access from every thread."""

    def enforce(self, bus: "EventBus") -> None:
        return None


class MainThreadEnforcer:
    """Only allows bus access from one thread, the interpreter's main thread unless told otherwise."""

    def __init__(self, thread_id: Optional[int] = None):
        self.thread_id = thread_id

    def enforce(self, bus: "EventBus") -> None:
        allowed = self.thread_id if self.thread_id is not None else threading.main_thread().ident
        current = threading.get_ident()
        if current != allowed:
            raise EventBusError(f"Event bus {bus!r} accessed from non-main thread {current}")


class EventBus:
    """Dispatches posted events synchronously to handlers registered for the event's type."""

    def __init__(self, thread_enforcer: Optional[ThreadEnforcer] = None, name: str = "default"):
        self.name = name
        self._enforcer: ThreadEnforcer = thread_enforcer or MainThreadEnforcer()
        self._handlers: Dict[Type[Any], List[Handler]] = {}
        self.log = get_logger(__name__)

    def __repr__(self) -> str:
        return f"EventBus(name={self.name!r})"

    def subscribe(self, event_type: Type[Any], handler: Handler) -> None:
        self._enforcer.enforce(self)
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: Type[Any], handler: Handler) -> None:
        self._enforcer.enforce(self)
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            raise EventBusError(
                f"Handler {handler!r} is not subscribed to {event_type.__name__}"
            )
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event_type]

    def post(self, event: Any) -> int:
        """
        Deliver ``event`` to every handler of its type and of its base classes.

        Returns:
            Number of handlers the event was delivered to

        A failing handler is logged and does not stop delivery to the others.
        """
        self._enforcer.enforce(self)
        targets: List[Handler] = []
        for event_type in type(event).__mro__:
            targets.extend(self._handlers.get(event_type, []))

        if not targets:
            self.log.debug(f"No subscribers for {type(event).__name__}")
            return 0

        for handler in targets:
            try:
                handler(event)
            except Exception:
                # Isolate handler failures
                self.log.exception(f"Handler {handler!r} failed for {type(event).__name__}")
        return len(targets)


# Process-wide bus and the enforcer it will be created with
_BUS: Optional[EventBus] = None
_THREAD_ENFORCER: ThreadEnforcer = MainThreadEnforcer()


def set_thread_enforcer(thread_enforcer: ThreadEnforcer) -> None:
    """Choose the thread enforcer for the process-wide bus; only allowed before it exists."""
    global _THREAD_ENFORCER
    if _BUS is not None:
        raise EventBusError("Event bus already initialized")
    if thread_enforcer is None:
        raise EventBusError("thread_enforcer is None")
    _THREAD_ENFORCER = thread_enforcer


def get_event_bus() -> EventBus:
    global _BUS
    if _BUS is None:
        _BUS = EventBus(_THREAD_ENFORCER)
    return _BUS


def reset_event_bus() -> None:
    """Drop the process-wide bus and restore the main-thread enforcer."""
    global _BUS, _THREAD_ENFORCER
    _BUS = None
    _THREAD_ENFORCER = MainThreadEnforcer()
