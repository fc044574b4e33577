"""Structured status events emitted while a generator runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from .logging import get_logger


@dataclass(frozen=True)
class StatusEvent:
    """Progress update for a single pipeline phase."""

    phase: str
    counts: Dict[str, int] = field(default_factory=dict)
    detail: Optional[str] = None


class Reporter(Protocol):
    """Receives status events from the generator."""

    def emit(self, event: StatusEvent) -> None:
        """Handle one status event."""


class LoggingReporter:
    """Forwards status events to the ``assetgen.status`` logger."""

    def __init__(self) -> None:
        self.logger = get_logger("status")

    def emit(self, event: StatusEvent) -> None:
        counts = ", ".join(f"{key}={value}" for key, value in event.counts.items())
        message = f"{event.phase}: {counts}" if counts else event.phase
        if event.detail:
            message = f"{message} ({event.detail})"
        if event.phase == "failed":
            self.logger.error(message)
        else:
            self.logger.debug(message)


class RecordingReporter:
    """Keeps every emitted event in memory."""

    def __init__(self) -> None:
        self.events: List[StatusEvent] = []

    def emit(self, event: StatusEvent) -> None:
        self.events.append(event)

    def phases(self) -> List[str]:
        return [event.phase for event in self.events]


__all__ = ["LoggingReporter", "RecordingReporter", "Reporter", "StatusEvent"]
