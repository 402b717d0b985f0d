"""
Optional tracing hooks for the layout engine.
An observer is any callable taking (event name, payload dict).
"""

import logging

logger = logging.getLogger(__name__)


def noop_observer(event: str, payload: dict):
    pass


def logging_observer(event: str, payload: dict):
    """Forward engine events to the debug log."""
    logger.debug(f"layout event {event}: {payload}")


class RecordingObserver:
    """Collects events in memory; handy when inspecting a single render pass."""

    def __init__(self):
        self.events = []

    def __call__(self, event: str, payload: dict):
        self.events.append((event, dict(payload)))

    def names(self):
        return [event for event, _ in self.events]
