"""Tests for the render log."""

from httpwire.logging import LogLevel, RenderEvent, RenderLog


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG sorts below WARNING."""
        assert LogLevel.DEBUG < LogLevel.WARNING


class TestRenderEvent:
    """Verify render event structure."""

    def test_event_has_fields(self) -> None:
        """An event stores level, kind, version, and detail."""
        event = RenderEvent(
            level=LogLevel.DEBUG, kind="request", version="HTTP/1.1", detail="GET / HTTP/1.1"
        )
        assert event.level is LogLevel.DEBUG
        assert event.kind == "request"
        assert event.version == "HTTP/1.1"
        assert event.detail == "GET / HTTP/1.1"

    def test_event_str(self) -> None:
        """String form is ``level kind version: detail``."""
        event = RenderEvent(
            level=LogLevel.WARNING,
            kind="response",
            version="'h2c'",
            detail="version has no wire name",
        )
        assert str(event) == "warning response 'h2c': version has no wire name"


class TestRenderLog:
    """Verify the render log."""

    def test_starts_empty(self) -> None:
        """A new log has no events."""
        assert RenderLog().events == []

    def test_record_keeps_order(self) -> None:
        """Events come back oldest first."""
        log = RenderLog()
        log.record(LogLevel.DEBUG, "request", "HTTP/1.1", "first")
        log.record(LogLevel.DEBUG, "response", "HTTP/1.0", "second")
        assert [e.detail for e in log.events] == ["first", "second"]
        assert [e.kind for e in log.events] == ["request", "response"]

    def test_events_returns_copy(self) -> None:
        """Changing the returned list does not touch the log."""
        log = RenderLog()
        log.record(LogLevel.DEBUG, "request", "HTTP/1.1", "x")
        log.events.clear()
        assert len(log.events) == 1

    def test_warnings_filter(self) -> None:
        """warnings() drops DEBUG events."""
        log = RenderLog()
        log.record(LogLevel.DEBUG, "request", "HTTP/1.1", "rendered")
        log.record(LogLevel.WARNING, "request", "None", "version has no wire name")
        warnings = log.warnings()
        assert len(warnings) == 1
        assert warnings[0].detail == "version has no wire name"
