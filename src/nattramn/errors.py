"""Nattramn exception hierarchy.

Shared across the router, assembler, finalizer, static resolver, and
dispatcher so every module raises and catches the same types.
"""


class NattramnError(Exception):
    """Base for all nattramn-specific errors."""


class ConfigurationError(NattramnError):
    """Raised when the server or router configuration is invalid.

    Surfaces at construction time, never converted into a response.
    """


class RequestError(NattramnError):
    """A failure while handling one request.

    The dispatcher catches these once at the request boundary and answers
    ``404 Not Found`` regardless of the concrete subclass.
    """

    default_message = "Request could not be handled"

    def __init__(self, path: str = "", detail: str = "") -> None:
        self.path = path
        self.detail = detail or self.default_message
        super().__init__(self.detail)

    def __str__(self) -> str:
        if self.path:
            return f"{self.detail}: {self.path!r}"
        return self.detail


class RouteNotFound(RequestError):  # noqa: N818
    """No registered page pattern matched the request path."""

    default_message = "Could not find route"


class FileNotFound(RequestError):  # noqa: N818
    """A static asset (or the client bundle) could not be resolved."""

    default_message = "Could not find file"


class HandlerProducedNoData(RequestError):  # noqa: N818
    """A page handler resolved to an empty or falsy value."""

    default_message = "Could not create PageData from handler"


class CompressionFailure(RequestError):  # noqa: N818
    """The negotiated codec failed to encode the response body."""

    default_message = "Could not compress response body"


class IOFailure(RequestError):  # noqa: N818
    """Filesystem or network I/O failed while building a response."""

    default_message = "I/O failed"
