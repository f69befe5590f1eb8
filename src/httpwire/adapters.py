"""Build messages from Flask request and response objects.

Flask (through Werkzeug) already parses requests and assembles
responses, but it never exposes the exact text that crossed the wire.
These helpers copy a Flask object into an ``HttpRequest`` or
``HttpResponse`` so it can be handed to the serializer:

    from flask import request
    text = serialize(request_from_flask(request))

Header order is taken as Werkzeug reports it.  WSGI carries header
values as latin-1 strings, so they are turned back into the bytes
they came from.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from flask import Request, Response

from httpwire.message import Header, HttpError, HttpRequest, HttpResponse, HttpVersion

_DEFAULT_PROTOCOL = "HTTP/1.1"
# Werkzeug hands over the path percent-decoded; re-quote all but these.
_PATH_SAFE = "/!$&'()*+,;=:@"


def _header_bytes(value: str) -> bytes:
    """Return the wire bytes of a WSGI header value."""
    try:
        return value.encode("latin-1")
    except UnicodeEncodeError:
        return value.encode()


def _headers(pairs: Iterable[tuple[str, str]]) -> list[Header]:
    return [Header(name, _header_bytes(value)) for name, value in pairs]


def request_from_flask(request: Request, *, absolute_form: bool = False) -> HttpRequest:
    """Copy a Flask request into an ``HttpRequest``.

    Args:
        request: The incoming request (e.g. ``flask.request``).
        absolute_form: Use the full URL as the target, as a client talking
            to a proxy would, instead of the path and query.

    Returns:
        The equivalent message, body included.

    Raises:
        HttpError: If the request's protocol is not a known HTTP version.

    """
    protocol = request.environ.get("SERVER_PROTOCOL", _DEFAULT_PROTOCOL)
    version = HttpVersion.from_wire(protocol)
    if version is None:
        msg = f"Unknown protocol: {protocol!r}"
        raise HttpError(msg)

    target = quote(f"{request.root_path}{request.path}", safe=_PATH_SAFE)
    if request.query_string:
        target = f"{target}?{request.query_string.decode('latin-1')}"
    if absolute_form:
        target = f"{request.scheme}://{request.host}{target}"

    return HttpRequest(
        method=request.method,
        target=target,
        version=version,
        headers=_headers(request.headers),
        body=request.get_data(),
    )


def response_from_flask(
    response: Response,
    *,
    version: HttpVersion = HttpVersion.HTTP_11,
) -> HttpResponse:
    """Copy a Flask response into an ``HttpResponse``.

    Flask responses do not record a protocol version, so the caller
    supplies one.  The reason phrase is left to the serializer: Werkzeug
    upper-cases the phrases it generates (``404 NOT FOUND``).

    Reading the body consumes a streamed response.
    """
    return HttpResponse(
        status=response.status_code,
        version=version,
        headers=_headers(response.headers),
        body=response.get_data(),
    )
