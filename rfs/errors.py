"""Request-level error taxonomy.

Every error below is recovered at the request boundary: it is logged and the
request ends without a body. Only a failure to bind the listening port is
fatal, and that one surfaces from uvicorn itself.
"""

from __future__ import annotations


class ServeError(Exception):
    """Base class for errors that end a request without a response body."""

    kind = "error"


class RefreshError(ServeError):
    """Directory unreadable or no eligible files found."""

    kind = "refresh"


class NotFoundError(ServeError):
    """Explicit-file lookup did not match any entry in the snapshot."""

    kind = "not_found"


class EmptySetError(ServeError):
    """A random pick was attempted against zero files."""

    kind = "empty"


class FileIOError(ServeError):
    """A listed file could not be opened when it was about to be served."""

    kind = "io"


class ResponseError(ServeError):
    """Writing the HTTP response failed (client went away)."""

    kind = "response"
