"""Render log: which messages a serializer put on the wire.

Serialization has no side effects of its own, so nothing is written to
files or streams.  A caller that wants a trace hands the serializer a
``RenderLog`` and reads the entries back afterwards.  Each entry names
the kind of message, the version it carried, and what happened to it.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a render event; compares with ``<`` for filtering."""

    DEBUG = 10
    WARNING = 30


@dataclass(frozen=True)
class RenderEvent:
    """One rendering outcome.

    Attributes:
        level: DEBUG for a rendered message, WARNING for one left unrendered.
        kind: "request" or "response".
        version: The version value the message carried, as text.
        detail: The start line, or why there is none.

    """

    level: LogLevel
    kind: str
    version: str
    detail: str

    def __str__(self) -> str:
        return f"{self.level.name.lower()} {self.kind} {self.version}: {self.detail}"


class RenderLog:
    """Append-only list of render events."""

    def __init__(self) -> None:
        self._events: list[RenderEvent] = []

    @property
    def events(self) -> list[RenderEvent]:
        """Return a copy of the events, oldest first."""
        return list(self._events)

    def record(self, level: LogLevel, kind: str, version: str, detail: str) -> None:
        """Append an event."""
        self._events.append(RenderEvent(level=level, kind=kind, version=version, detail=detail))

    def warnings(self) -> list[RenderEvent]:
        """Return the events at WARNING or above."""
        return [e for e in self._events if e.level >= LogLevel.WARNING]
