r"""Message serialization: structured messages → wire-format text.

Wire format::

    METHOD TARGET VERSION\r\n          (request)
    VERSION STATUS [REASON]\r\n        (response)
    Name:value\r\n
    ...
    Name:value\r\n
    [body]

Header lines are joined with CRLF and one more CRLF separates the
block from the body.  With no headers that gives the familiar blank
line (``GET / HTTP/1.1\r\n\r\n``); with headers the body follows the
last header line directly.  ``terminate_headers=True`` adds the blank
line in every case, which is what an HTTP/1.x parser needs to find the
end of the head.

The serializer is a pure function of the message.  It computes no
``Content-Length`` and applies no transfer coding: the header list and
body go out exactly as the caller built them.

Header values are bytes and may not be valid UTF-8.  For the text form
they are decoded with the replacement character standing in for each
invalid sequence, so a bad header never aborts an otherwise valid
message.

The only way to get no output is a version outside the fixed table of
version names.  That is reported as ``None``, not raised: it means the
message cannot be put on a line-based wire, not that anything broke.
"""

from httpwire.logging import LogLevel, RenderLog
from httpwire.message import (
    VERSION_NAMES,
    Header,
    HttpError,
    HttpMessage,
    HttpRequest,
    HttpResponse,
    HttpVersion,
    status_reason,
)

CRLF = "\r\n"


def decode_lossy(data: bytes) -> str:
    """Decode *data* as UTF-8, replacing invalid sequences with U+FFFD."""
    return data.decode("utf-8", errors="replace")


class MessageSerializer:
    """Render requests and responses as wire-format text or bytes.

    Options are fixed at construction and the serializer keeps no
    per-message state, so one instance can serve any number of threads.
    """

    def __init__(
        self,
        *,
        header_separator: str = ":",
        reason_phrases: bool = True,
        terminate_headers: bool = False,
        log: RenderLog | None = None,
    ) -> None:
        """Create a serializer.

        Args:
            header_separator: Text placed between a header name and its value.
            reason_phrases: Fill in the standard reason phrase when a
                response has none of its own.
            terminate_headers: End the last header line with its own CRLF so
                the head closes with a blank line, as HTTP/1.x parsers expect.
                Off by default: header lines are CRLF-joined and a single
                CRLF separates them from the body.
            log: Optional record of each message rendered or refused.

        Raises:
            HttpError: If *header_separator* contains CR or LF.

        """
        if "\r" in header_separator or "\n" in header_separator:
            msg = f"Header separator must not contain CR or LF: {header_separator!r}"
            raise HttpError(msg)
        self._header_separator = header_separator
        self._reason_phrases = reason_phrases
        self._terminate_headers = terminate_headers
        self._log = log

    def serialize(self, message: HttpMessage) -> str | None:
        """Return *message* as wire text, or None if its version has no name."""
        head = self._render_head(message)
        if head is None:
            return None
        body = message.body
        if isinstance(body, bytes):
            body = decode_lossy(body)
        return head + body

    def serialize_bytes(self, message: HttpMessage) -> bytes | None:
        """Return *message* as wire bytes, or None if its version has no name.

        The head is the same text ``serialize`` produces, encoded as UTF-8.
        A bytes body is appended untouched.
        """
        head = self._render_head(message)
        if head is None:
            return None
        body = message.body
        if isinstance(body, str):
            body = body.encode()
        return b"".join((head.encode(), body))

    # -- Rendering helpers ---------------------------------------------------

    def _render_head(self, message: HttpMessage) -> str | None:
        """Return the start line, header lines and separating CRLF."""
        if not isinstance(message, HttpRequest | HttpResponse):
            msg = f"Cannot serialize {type(message).__name__}"
            raise TypeError(msg)
        kind = "request" if isinstance(message, HttpRequest) else "response"
        version = self._render_version(message, kind)
        if version is None:
            return None

        match message:
            case HttpRequest():
                start_line = f"{message.method} {message.target} {version}"
            case HttpResponse():
                start_line = f"{version} {self._render_status(message)}"

        lines = [self._render_header(header) for header in message.headers]
        parts: list[str] = [start_line, CRLF]
        if self._terminate_headers:
            for line in lines:
                parts.append(line)
                parts.append(CRLF)
        else:
            parts.append(CRLF.join(lines))
        parts.append(CRLF)

        if self._log is not None:
            detail = f"{start_line} ({len(lines)} headers)"
            self._log.record(LogLevel.DEBUG, kind, version, detail)
        return "".join(parts)

    def _render_version(self, message: HttpMessage, kind: str) -> str | None:
        version = message.version
        # unhashable values must not reach the table lookup
        if isinstance(version, HttpVersion):
            return VERSION_NAMES[version]
        if self._log is not None:
            self._log.record(LogLevel.WARNING, kind, repr(version), "version has no wire name")
        return None

    def _render_status(self, response: HttpResponse) -> str:
        reason = response.reason
        if reason is None and self._reason_phrases:
            reason = status_reason(response.status)
        if reason is None:
            return str(response.status)
        return f"{response.status} {reason}"

    def _render_header(self, header: Header) -> str:
        return f"{header.name}{self._header_separator}{decode_lossy(header.value)}"


_DEFAULT = MessageSerializer()


def serialize(message: HttpMessage) -> str | None:
    """Serialize *message* to text with the default options."""
    return _DEFAULT.serialize(message)


def serialize_bytes(message: HttpMessage) -> bytes | None:
    """Serialize *message* to bytes with the default options."""
    return _DEFAULT.serialize_bytes(message)
