"""Event bus for worker and engine observability."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


@dataclass
class Event:
    event_type: str
    run_id: str
    job_id: str | None = None
    ts: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Any]


class EventBus(Protocol):
    async def emit(self, event: Event) -> None: ...
    def on(self, event_type: str, handler: EventHandler) -> None: ...
    def off(self, event_type: str, handler: EventHandler) -> None: ...
    def on_all(self, handler: EventHandler) -> None: ...


class InMemoryEventBus:
    """In-memory event bus with sync and async handler support.

    With ``isolate_errors`` a failing handler is logged and recorded in
    ``failures``; the remaining handlers still run and ``emit`` does not raise.
    """

    def __init__(self, keep_history: bool = True, isolate_errors: bool = False) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._global_handlers: list[EventHandler] = []
        self._history: list[Event] = []
        self._keep_history = keep_history
        self._isolate_errors = isolate_errors
        self._failures: list[tuple[Event, Exception]] = []

    async def emit(self, event: Event) -> None:
        if self._keep_history:
            self._history.append(event)

        handlers = list(self._global_handlers)
        handlers.extend(self._handlers.get(event.event_type, ()))

        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                if not self._isolate_errors:
                    raise
                logger.exception("Handler %r failed on %s", handler, event.event_type)
                self._failures.append((event, e))

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: str, handler: EventHandler) -> None:
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

    def on_all(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)

    @property
    def history(self) -> list[Event]:
        return list(self._history)

    def of_type(self, event_type: str) -> list[Event]:
        return [e for e in self._history if e.event_type == event_type]

    @property
    def failures(self) -> list[tuple[Event, Exception]]:
        return list(self._failures)

    def clear_history(self) -> None:
        self._history.clear()
        self._failures.clear()
