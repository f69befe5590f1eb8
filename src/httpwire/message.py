"""HTTP message model: the structured side of the wire.

A message is either a request or a response.  Both share a protocol
version, an ordered list of headers, and a body; they differ only in
their start line:

    Request:   GET /index.html HTTP/1.1
    Response:  HTTP/1.1 200 OK

Messages are frozen dataclasses.  Fields are checked for syntactic
well-formedness when the message is built, so serializing never fails
on a malformed field.  The version is the exception: it is looked up
at serialization time, and a value outside ``HttpVersion`` produces no
output rather than an error.  Nothing beyond syntax is checked: a
``Content-Length`` that disagrees with the body is the caller's business.

Headers are kept as an ordered tuple rather than a dict.  HTTP allows a
name to repeat (``Set-Cookie`` is the usual example) and each occurrence
must reach the wire on its own line, in the order given.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class HttpError(Exception):
    """Raise when a message field or serializer option is malformed."""


class HttpVersion(Enum):
    """Protocol versions a message can carry, as (major, minor)."""

    HTTP_09 = (0, 9)
    HTTP_10 = (1, 0)
    HTTP_11 = (1, 1)
    HTTP_2 = (2, 0)
    HTTP_3 = (3, 0)

    @property
    def wire_name(self) -> str:
        """Return the version token as it appears in a start line."""
        return VERSION_NAMES[self]

    @property
    def is_line_based(self) -> bool:
        """Return True for the versions framed as text lines (0.9 to 1.1).

        HTTP/2 and HTTP/3 use binary framing on a real connection.  They
        still have a textual name, so the serializer renders them too.
        """
        return self.value < (2, 0)

    @classmethod
    def from_wire(cls, text: str) -> "HttpVersion | None":
        """Return the version whose wire name is *text*, or None."""
        return _VERSIONS_BY_NAME.get(text)


VERSION_NAMES: dict[HttpVersion, str] = {
    HttpVersion.HTTP_09: "HTTP/0.9",
    HttpVersion.HTTP_10: "HTTP/1.0",
    HttpVersion.HTTP_11: "HTTP/1.1",
    HttpVersion.HTTP_2: "HTTP/2",
    HttpVersion.HTTP_3: "HTTP/3",
}

_VERSIONS_BY_NAME: dict[str, HttpVersion] = {name: v for v, name in VERSION_NAMES.items()}


_REASON_PHRASES: dict[int, str] = {
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",
    103: "Early Hints",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-Status",
    208: "Already Reported",
    226: "IM Used",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    307: "Temporary Redirect",
    308: "Permanent Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Payload Too Large",
    414: "URI Too Long",
    415: "Unsupported Media Type",
    416: "Range Not Satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    421: "Misdirected Request",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    425: "Too Early",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",
    451: "Unavailable For Legal Reasons",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
    505: "HTTP Version Not Supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    510: "Not Extended",
    511: "Network Authentication Required",
}


def status_reason(status: int) -> str | None:
    """Return the standard reason phrase for a status code, or None if unregistered."""
    return _REASON_PHRASES.get(status)


# ---------------------------------------------------------------------------
# Syntax checks
# ---------------------------------------------------------------------------

MIN_STATUS = 100
MAX_STATUS = 599

_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_TARGET_FORBIDDEN = re.compile(r"[\x00-\x20\x7f]")
_VALUE_FORBIDDEN = re.compile(rb"[\r\n\x00]")

Body = bytes | str


def _check_token(kind: str, text: str) -> None:
    if not isinstance(text, str) or not _TOKEN.fullmatch(text):
        msg = f"Invalid {kind}: {text!r}"
        raise HttpError(msg)


def _check_target(target: str) -> None:
    if not isinstance(target, str) or not target or _TARGET_FORBIDDEN.search(target):
        msg = f"Invalid request target: {target!r}"
        raise HttpError(msg)


def _coerce_body(body: object) -> Body:
    if isinstance(body, str | bytes):
        return body
    if isinstance(body, bytearray | memoryview):
        return bytes(body)
    msg = f"Body must be bytes or str, not {type(body).__name__}"
    raise HttpError(msg)


@dataclass(frozen=True)
class Header:
    """One header field: a token name and a raw byte value.

    The name keeps its original spelling on the wire; ``matches``
    compares it case-insensitively.  The value is stored as bytes and
    may hold bytes that are not valid UTF-8 (obsolete ``obs-text``);
    a ``str`` value is encoded as UTF-8.
    """

    name: str
    value: bytes

    def __post_init__(self) -> None:
        """Validate the name and normalise the value to bytes."""
        _check_token("header name", self.name)
        value = self.value
        if isinstance(value, str):
            value = value.encode()
        elif isinstance(value, bytearray | memoryview):
            value = bytes(value)
        if not isinstance(value, bytes):
            msg = f"Header value for {self.name!r} must be bytes or str"
            raise HttpError(msg)
        if _VALUE_FORBIDDEN.search(value):
            msg = f"Header value for {self.name!r} contains CR, LF or NUL"
            raise HttpError(msg)
        object.__setattr__(self, "value", value)

    def matches(self, name: str) -> bool:
        """Return True if this header's name equals *name*, ignoring case."""
        return self.name.lower() == name.lower()


HeaderLike = Header | tuple[str, bytes | str]


def _normalize_headers(
    headers: Iterable[HeaderLike] | Mapping[str, bytes | str],
) -> tuple[Header, ...]:
    items: Iterable[object] = headers.items() if isinstance(headers, Mapping) else headers
    result: list[Header] = []
    for item in items:
        if isinstance(item, Header):
            result.append(item)
        elif isinstance(item, tuple | list) and len(item) == 2:  # noqa: PLR2004
            result.append(Header(item[0], item[1]))
        else:
            msg = f"Header must be a Header or a (name, value) pair, not {item!r}"
            raise HttpError(msg)
    return tuple(result)


def _values_for(headers: tuple[Header, ...], name: str) -> list[bytes]:
    return [h.value for h in headers if h.matches(name)]


@dataclass(frozen=True)
class HttpRequest:
    """An HTTP request.

    Attributes:
        method: The method token (e.g. "GET").
        target: The request target (e.g. "/index.html" or "http://localhost/").
        version: The protocol version (default HTTP/1.1).
        headers: Ordered header fields; duplicates are kept. A mapping is
            accepted and read in its iteration order.
        body: Payload as bytes or text (default empty).

    """

    method: str
    target: str
    version: HttpVersion = HttpVersion.HTTP_11
    headers: tuple[Header, ...] = field(default_factory=tuple)
    body: Body = b""

    def __post_init__(self) -> None:
        """Validate the start line and normalise headers and body."""
        _check_token("method", self.method)
        _check_target(self.target)
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        object.__setattr__(self, "body", _coerce_body(self.body))

    def header_values(self, name: str) -> list[bytes]:
        """Return every value of header *name* in order, ignoring case."""
        return _values_for(self.headers, name)


@dataclass(frozen=True)
class HttpResponse:
    """An HTTP response.

    Attributes:
        status: Status code between 100 and 599.
        reason: Reason phrase; None means use the standard phrase, if any.
        version: The protocol version (default HTTP/1.1).
        headers: Ordered header fields; duplicates are kept. A mapping is
            accepted and read in its iteration order.
        body: Payload as bytes or text (default empty).

    """

    status: int
    reason: str | None = None
    version: HttpVersion = HttpVersion.HTTP_11
    headers: tuple[Header, ...] = field(default_factory=tuple)
    body: Body = b""

    def __post_init__(self) -> None:
        """Validate the status line and normalise headers and body."""
        status = self.status
        if isinstance(status, bool) or not isinstance(status, int):
            msg = f"Status must be an integer, not {status!r}"
            raise HttpError(msg)
        if not MIN_STATUS <= status <= MAX_STATUS:
            msg = f"Status {status} is outside {MIN_STATUS}-{MAX_STATUS}"
            raise HttpError(msg)
        if self.reason is not None and ("\r" in self.reason or "\n" in self.reason):
            msg = f"Reason phrase contains CR or LF: {self.reason!r}"
            raise HttpError(msg)
        # http.HTTPStatus and other int subclasses render as plain numbers
        object.__setattr__(self, "status", int(status))
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        object.__setattr__(self, "body", _coerce_body(self.body))

    def header_values(self, name: str) -> list[bytes]:
        """Return every value of header *name* in order, ignoring case."""
        return _values_for(self.headers, name)


HttpMessage = HttpRequest | HttpResponse
