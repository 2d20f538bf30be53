"""Page handler contract: what a handler returns and how it is normalized."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from nattramn.errors import HandlerProducedNoData

if TYPE_CHECKING:
    from nattramn.http.request import Request

# Async page handler: (request, params) -> PageData
PageHandler: TypeAlias = Callable[["Request", dict[str, str]], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class PageData:
    """Output of one page handler invocation.

    ``head`` holds markup injected after the template's ``<head>`` tag
    (and at most one ``<title>``); ``body`` is the fragment placed inside
    the router marker.  ``headers`` are passed through to the response.
    """

    head: str = ""
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)


def _check_headers(headers: Mapping[Any, Any], path: str) -> None:
    # Header names and values go on the wire as latin-1
    for name, value in headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            msg = f"handler header {name!r} must map a str to a str, got {type(value).__name__}"
            raise HandlerProducedNoData(path, msg)
        try:
            name.encode("latin-1")
            value.encode("latin-1")
        except UnicodeEncodeError:
            msg = f"handler header {name!r} is not latin-1 encodable"
            raise HandlerProducedNoData(path, msg) from None


def coerce_page_data(value: Any, path: str = "") -> PageData:
    """Normalize a handler result into ``PageData``.

    Handlers may return ``PageData`` or a mapping with ``head``/``body``/
    ``headers`` keys.  Empty or falsy results, and headers that cannot be
    sent as latin-1 strings, raise ``HandlerProducedNoData``.
    """
    if not value:
        raise HandlerProducedNoData(path)
    if isinstance(value, PageData):
        data = value
    elif isinstance(value, Mapping):
        data = PageData(
            head=value.get("head") or "",
            body=value.get("body") or "",
            headers=dict(value.get("headers") or {}),
        )
    else:
        msg = f"handler returned {type(value).__name__}, expected PageData or a mapping"
        raise HandlerProducedNoData(path, msg)
    _check_headers(data.headers, path)
    return data
