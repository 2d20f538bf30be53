"""Immutable HTTP request.

Frozen metadata built once from the ASGI scope.  Page handlers receive
it alongside the extracted route parameters.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qs

from nattramn.http.headers import Headers


def _parse_query(query_string: bytes) -> Mapping[str, str]:
    parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
    return MappingProxyType({key: values[0] for key, values in parsed.items()})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``query`` maps each query parameter to its first value.
    ``path_params`` is empty until the router binds a matching page.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""
    query: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    @property
    def extension(self) -> str:
        """File extension of the last path segment (``".css"``), or ``""``."""
        return PurePosixPath(self.path).suffix

    @property
    def has_extension(self) -> bool:
        return self.extension != ""

    @property
    def accept_encoding(self) -> str:
        return self.headers.get("accept-encoding") or ""

    def with_path_params(self, params: Mapping[str, str]) -> "Request":
        """Return a copy carrying the matched route parameters."""
        return replace(self, path_params=MappingProxyType(dict(params)))

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> "Request":
        """Create a Request from an ASGI HTTP scope."""
        query_string = scope.get("query_string", b"")
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope.get("method", "GET"),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=query_string,
            query=_parse_query(query_string),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
