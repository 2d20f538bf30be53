"""HTTP responses with a chainable ``.with_*()`` transformation API.

Each transformation returns a new response.  Bodies are always bytes:
text is encoded before it reaches this layer, so the finalizer and the
sender only ever see one body type.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TypeAlias


def _set_header(
    headers: tuple[tuple[str, str], ...], name: str, value: str
) -> tuple[tuple[str, str], ...]:
    lowered = name.lower()
    kept = tuple((k, v) for k, v in headers if k.lower() != lowered)
    return (*kept, (name, value))


def _get_header(headers: tuple[tuple[str, str], ...], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers:
        if key.lower() == lowered:
            return value
    return None


@dataclass(frozen=True, slots=True)
class Response:
    """An in-memory HTTP response.

    Header names are case-insensitive: ``with_header`` replaces any
    existing header with the same name.
    """

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with *name* set to *value*."""
        return replace(self, headers=_set_header(self.headers, name, value))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with every header in *headers* set."""
        merged = self.headers
        for name, value in headers.items():
            merged = _set_header(merged, name, value)
        return replace(self, headers=merged)

    def with_body(self, body: bytes) -> "Response":
        return replace(self, body=body)

    def with_vary(self, name: str) -> "Response":
        """Return a new Response whose ``Vary`` header also lists *name*."""
        current = self.header("Vary")
        if current is None:
            return self.with_header("Vary", name)
        if name.lower() in (part.strip().lower() for part in current.split(",")):
            return self
        return self.with_header("Vary", f"{current}, {name}")

    def header(self, name: str) -> str | None:
        """Return the value of header *name*, or ``None``."""
        return _get_header(self.headers, name)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A response streamed from disk without buffering the whole file.

    ``size`` comes from filesystem metadata and becomes ``Content-Length``.
    """

    path: Path
    size: int
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "FileResponse":
        return replace(self, headers=_set_header(self.headers, name, value))

    def header(self, name: str) -> str | None:
        return _get_header(self.headers, name)


AnyResponse: TypeAlias = Response | FileResponse


def not_found() -> Response:
    """The uniform failure response."""
    return Response(
        body=b"Not Found",
        status=404,
        headers=(("Content-Type", "text/plain; charset=utf-8"),),
    )


def redirect(url: str, *, status: int = 302) -> Response:
    return Response(status=status, headers=(("Location", url),))
