"""Observability module: events and logging setup."""

from resumable_digest.observability.event_bus import Event, EventBus, InMemoryEventBus
from resumable_digest.observability.logging_config import setup_logging

__all__ = ["Event", "EventBus", "InMemoryEventBus", "setup_logging"]
