"""ASGI handler — the per-request dispatcher.

The only component that touches the raw ASGI scope.  Each request takes
exactly one branch, in order:

1. ``/nattramn-client.js`` -> client bundle (inline or redirect)
2. path with a file extension and a static root -> static asset
3. path with a file extension and no static root -> ``FileNotFound``
4. anything else -> router -> page handler -> assembler -> finalizer

Every failure converges on one boundary that answers ``404 Not Found``.
"""

import logging

from nattramn._internal.asgi import Receive, Scope, Send
from nattramn._internal.invoke import invoke
from nattramn.config import ServerConfig
from nattramn.errors import FileNotFound, RequestError
from nattramn.http.request import Request
from nattramn.http.response import AnyResponse, Response, not_found
from nattramn.routing.route import RouteMatch
from nattramn.routing.router import Router
from nattramn.server.assembler import assemble
from nattramn.server.client_bundle import CLIENT_BUNDLE_PATH, ClientBundle
from nattramn.server.finalizer import finalize
from nattramn.server.negotiation import choose_compression, is_partial
from nattramn.server.sender import send_any
from nattramn.server.static import serve_static

logger = logging.getLogger("nattramn.server")


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: Router,
    config: ServerConfig,
    client_bundle: ClientBundle,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await dispatch(request, router=router, config=config, client_bundle=client_bundle)
    except RequestError as exc:
        _log_failure(request, exc)
        response = not_found()
    except Exception as exc:
        logger.exception("Unexpected failure for %s %s", request.method, request.url)
        _log_failure(request, exc)
        response = not_found()

    await send_any(response, send, method=request.method)


async def dispatch(
    request: Request,
    *,
    router: Router,
    config: ServerConfig,
    client_bundle: ClientBundle,
) -> AnyResponse:
    """Pick the branch for *request* and build its response.

    Raises a ``RequestError`` subclass on any failure.
    """
    path = request.path

    if request.has_extension:
        if path == CLIENT_BUNDLE_PATH:
            return await client_bundle.respond(request)
        if config.serve_static is not None:
            return await serve_static(request, path, config)
        raise FileNotFound(path, "Static serving is not configured")

    match = router.find(path)
    return await render_page(match, request, config)


async def render_page(match: RouteMatch, request: Request, config: ServerConfig) -> Response:
    """Run the matched page handler once and build the final response."""
    request = request.with_path_params(match.params)
    partial = is_partial(request)

    page_data = await invoke(match.route.handler, request, dict(match.params))
    response = assemble(page_data, match.route.template, partial, path=request.path)

    compression = choose_compression(request, config.compression)
    return finalize(response, compression, path=request.path)


def _log_failure(request: Request, exc: BaseException) -> None:
    logger.debug(
        "Nattramn was asked to answer for %s but did not find a suitable way to handle it.",
        request.url,
    )
    if request.has_extension:
        logger.debug("The file is missing.")
    else:
        logger.debug("The route is missing.")
    logger.debug("%s: %s", type(exc).__name__, exc)
