"""Nattramn application class.

Mutable during setup (page registration).
Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from nattramn._internal.asgi import Receive, Scope, Send
from nattramn.config import BundleMode, Config, Page
from nattramn.errors import IOFailure
from nattramn.pages import PageHandler
from nattramn.routing.route import Route
from nattramn.routing.router import Router
from nattramn.server.client_bundle import ClientBundle
from nattramn.server.handler import handle_request

logger = logging.getLogger("nattramn.server")


class Nattramn:
    """The nattramn application: an ASGI callable.

    Configure with a ``Config`` or the equivalent nested mapping::

        app = Nattramn({
            "server": {"serveStatic": "public"},
            "router": {"pages": [{"route": "/", "template": template, "handler": home}]},
        })

    or register pages with the decorator::

        @app.page("/posts/:slug", template)
        async def post(request, params):
            return PageData(head="<title>Post</title>", body=f"<h1>{params['slug']}</h1>")

    Thread safety:
        Registration happens at import time, single-threaded.  The freeze
        uses a Lock + double-check so exactly one worker compiles the
        router, even when several call ``__call__()`` on first request.
    """

    __slots__ = (
        "_client_bundle",
        "_freeze_lock",
        "_frozen",
        "_pending_pages",
        "_router",
        "config",
    )

    def __init__(
        self,
        config: Config | Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if config is None:
            config = Config()
        elif not isinstance(config, Config):
            config = Config.from_mapping(config)

        self.config: Config = config
        self._pending_pages: list[Page] = list(config.router.pages)
        self._client_bundle = ClientBundle(config.server, transport=transport)
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._router: Router | None = None

    # -- Page registration --

    def page(self, route: str, template: str) -> Callable[[PageHandler], PageHandler]:
        """Register a page handler via decorator.

        Args:
            route: Path pattern. Use ``:name`` for path parameters.
            template: Page template containing the router marker pair.
        """

        def decorator(func: PageHandler) -> PageHandler:
            self.add_page(Page(route=route, template=template, handler=func))
            return func

        return decorator

    def add_page(self, page: Page) -> None:
        """Append *page* to the route table.  Earlier pages win on overlap."""
        self._check_not_frozen()
        self._pending_pages.append(page)

    @property
    def pages(self) -> tuple[Page, ...]:
        return tuple(self._pending_pages)

    @property
    def client_bundle(self) -> ClientBundle:
        return self._client_bundle

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server (dev or production based on ``config.server.debug``)."""
        self._ensure_frozen()
        server = self.config.server

        _host = host or server.host
        _port = port or server.port

        logger.info("Nattramn is running at: http://%s:%d", _host, _port)

        if server.debug:
            from nattramn.server.dev import run_dev_server

            run_dev_server(self, _host, _port, reload=True, log_level="debug")
        else:
            from nattramn.server.production import run_production_server

            run_production_server(
                self,
                host=_host,
                port=_port,
                workers=server.workers,
                log_level=server.log_level,
                log_format=server.log_format,
            )

    def start_server(self, port: int = 5000) -> None:
        """Start serving on *port* (all other settings from config)."""
        self.run(port=port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            config=self.config.server,
            client_bundle=self._client_bundle,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup and preload an inline client bundle."""
        self._ensure_frozen()

        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                if self._client_bundle.mode is BundleMode.INLINE:
                    try:
                        await self._client_bundle.load()
                    except IOFailure as exc:
                        # Retried on the first request to the bundle path
                        logger.warning("Client bundle not preloaded: %s", exc)
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the page table.  MUST only be called while holding _freeze_lock."""
        router = Router()
        for page in self._pending_pages:
            router.add(Route(pattern=page.route, template=page.template, handler=page.handler))
        router.compile()
        self._router = router
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register pages after the app has started serving requests. "
                "Register pages before calling app.run()."
            )
            raise RuntimeError(msg)
