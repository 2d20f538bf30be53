"""Nattramn — server-side rendering with partial content for client-side navigation.

Serves full HTML documents on first load (and to crawlers) and only the
changed page fragment when the client-side router asks for it.

Basic usage::

    from nattramn import Nattramn, PageData

    template = "<html><head></head><body><nattramn-router></nattramn-router></body></html>"

    app = Nattramn({"server": {"serveStatic": "public"}})

    @app.page("/", template)
    async def home(request, params):
        return PageData(head="<title>Home</title>", body="<h1>Home</h1>")

    app.start_server(5000)
"""

__version__ = "0.1.0"
__all__ = [
    "BundleMode",
    "Compression",
    "Config",
    "ConfigurationError",
    "FileNotFound",
    "HandlerProducedNoData",
    "Nattramn",
    "NattramnError",
    "Page",
    "PageData",
    "Request",
    "Response",
    "RouteNotFound",
    "RouterConfig",
    "ServerConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import nattramn`` fast while providing a flat top-level namespace.
    """
    if name == "Nattramn":
        from nattramn.app import Nattramn

        return Nattramn

    if name in ("BundleMode", "Compression", "Config", "Page", "RouterConfig", "ServerConfig"):
        from nattramn import config as _config

        return getattr(_config, name)

    if name == "PageData":
        from nattramn.pages import PageData

        return PageData

    if name == "Request":
        from nattramn.http.request import Request

        return Request

    if name == "Response":
        from nattramn.http.response import Response

        return Response

    if name in (
        "ConfigurationError",
        "FileNotFound",
        "HandlerProducedNoData",
        "NattramnError",
        "RouteNotFound",
    ):
        from nattramn import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
