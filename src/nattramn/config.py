"""Server and router configuration.

Every config type is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups at request time.  The
resolved ``Config`` is built once and handed by reference to each
component that needs it.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from nattramn import __version__
from nattramn.errors import ConfigurationError
from nattramn.pages import PageHandler


class Compression(StrEnum):
    """Response compression method.  The value is the ``content-encoding`` token."""

    GZIP = "gzip"
    BROTLI = "br"
    NONE = "none"

    @classmethod
    def parse(cls, value: "Compression | str | None") -> "Compression":
        """Resolve a user-supplied compression setting; ``None`` means Brotli."""
        if value is None:
            return cls.BROTLI
        if isinstance(value, Compression):
            return value
        normalized = str(value).strip().lower()
        if normalized == "brotli":
            return cls.BROTLI
        try:
            return cls(normalized)
        except ValueError:
            msg = f"Unknown compression {value!r}. Use 'gzip', 'br' or 'none'."
            raise ConfigurationError(msg) from None


class BundleMode(StrEnum):
    """How ``/nattramn-client.js`` is answered."""

    INLINE = "inline"
    REDIRECT = "redirect"


DEFAULT_BUNDLE_URL = "https://deno.land/x/npm:nattramn/dist-web/index.bundled.js"
DEFAULT_CDN_URL = "https://cdn.jsdelivr.net/npm/nattramn@{version}/dist-web/index.bundled.js"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration.  Immutable after creation.

    All fields have defaults. Override what you need::

        config = ServerConfig(compression="gzip", serve_static="public")
    """

    # Negotiation (str and None are accepted and parsed to Compression)
    compression: Compression = Compression.BROTLI

    # Static files (directory; None disables static serving)
    serve_static: str | Path | None = None  # normalized to str

    # Listener
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    workers: int = 1

    # Logging (forwarded to pounce)
    log_level: str = "info"
    log_format: str = "text"

    # Client bundle at /nattramn-client.js
    client_bundle: BundleMode = BundleMode.REDIRECT  # str accepted, parsed in __post_init__
    client_bundle_url: str = DEFAULT_BUNDLE_URL
    client_cdn_url: str = DEFAULT_CDN_URL
    client_version: str = __version__

    def __post_init__(self) -> None:
        object.__setattr__(self, "compression", Compression.parse(self.compression))
        try:
            object.__setattr__(self, "client_bundle", BundleMode(self.client_bundle))
        except ValueError:
            msg = f"Unknown client bundle mode {self.client_bundle!r}. Use 'inline' or 'redirect'."
            raise ConfigurationError(msg) from None
        if self.serve_static is not None:
            object.__setattr__(self, "serve_static", str(self.serve_static))


@dataclass(frozen=True, slots=True)
class Page:
    """A registered page: route pattern, shared template, and async handler."""

    route: str
    template: str
    handler: PageHandler

    def __post_init__(self) -> None:
        if not isinstance(self.route, str) or not self.route.startswith("/"):
            msg = f"Page route must be a string starting with '/', got {self.route!r}"
            raise ConfigurationError(msg)
        if not isinstance(self.template, str):
            msg = f"Page template for {self.route!r} must be a string"
            raise ConfigurationError(msg)
        if not callable(self.handler):
            msg = f"Page handler for {self.route!r} is not callable"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Ordered page table. First matching route wins."""

    pages: tuple[Page, ...] = ()


@dataclass(frozen=True, slots=True)
class Config:
    """Top-level configuration: ``server`` and ``router`` sections."""

    server: ServerConfig = field(default_factory=ServerConfig)
    router: RouterConfig = field(default_factory=RouterConfig)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Config":
        """Build a Config from the nested dictionary shape.

        Accepts camelCase keys as well as snake_case::

            Config.from_mapping({
                "server": {"compression": "gzip", "serveStatic": "public"},
                "router": {"pages": [{"route": "/", "template": t, "handler": h}]},
            })
        """
        server = _server_from_mapping(mapping.get("server") or {})
        router_section = mapping.get("router") or {}
        pages = tuple(_page_from_mapping(p) for p in router_section.get("pages") or ())
        return cls(server=server, router=RouterConfig(pages=pages))


_SERVER_KEYS: dict[str, str] = {
    "serveStatic": "serve_static",
    "clientBundle": "client_bundle",
    "clientBundleUrl": "client_bundle_url",
    "clientCdnUrl": "client_cdn_url",
    "clientVersion": "client_version",
    "logLevel": "log_level",
    "logFormat": "log_format",
}


def _server_from_mapping(section: Mapping[str, Any]) -> ServerConfig:
    known = set(ServerConfig.__dataclass_fields__)
    kwargs: dict[str, Any] = {}
    for key, value in section.items():
        name = _SERVER_KEYS.get(key, key)
        if name not in known:
            msg = f"Unknown server option {key!r}"
            raise ConfigurationError(msg)
        kwargs[name] = value
    return ServerConfig(**kwargs)


def _page_from_mapping(entry: Page | Mapping[str, Any]) -> Page:
    if isinstance(entry, Page):
        return entry
    missing = [key for key in ("route", "template", "handler") if key not in entry]
    if missing:
        msg = f"Page entry is missing {', '.join(missing)}"
        raise ConfigurationError(msg)
    handler: Callable[..., Any] = entry["handler"]
    return Page(route=entry["route"], template=entry["template"], handler=handler)
