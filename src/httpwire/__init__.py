"""httpwire: render structured HTTP messages as wire-format text.

Re-exports public symbols so callers can write::

    from httpwire import HttpResponse, serialize

Note: the Flask adapters are NOT re-exported here so that importing the
package does not require Flask.  Import them directly from
``httpwire.adapters``.
"""

from httpwire.logging import LogLevel, RenderEvent, RenderLog
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
from httpwire.serializer import MessageSerializer, decode_lossy, serialize, serialize_bytes

__all__ = [
    "VERSION_NAMES",
    "Header",
    "HttpError",
    "HttpMessage",
    "HttpRequest",
    "HttpResponse",
    "HttpVersion",
    "LogLevel",
    "MessageSerializer",
    "RenderEvent",
    "RenderLog",
    "decode_lossy",
    "serialize",
    "serialize_bytes",
    "status_reason",
]
