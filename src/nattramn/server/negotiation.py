"""Content negotiation — partial vs. full documents and response compression.

Both decisions are pure functions of the request and the frozen config.
"""

from nattramn.config import Compression
from nattramn.http.request import Request

PARTIAL_HEADER = "x-partial-content"
PARTIAL_QUERY = "partialContent"


def is_partial(request: Request) -> bool:
    """True if the client asked for the page fragment only.

    Either the ``x-partial-content`` header or the ``partialContent`` query
    parameter selects partial mode when present with a non-empty value.
    """
    return bool(request.headers.get(PARTIAL_HEADER) or request.query.get(PARTIAL_QUERY))


def choose_compression(request: Request, configured: Compression) -> Compression:
    """Pick the codec for this response.

    Compression applies only when the server is configured for gzip or
    Brotli *and* the request's ``accept-encoding`` contains that exact
    token.  Everything else gets ``Compression.NONE``.
    """
    if configured is Compression.NONE:
        return Compression.NONE
    if configured.value in request.accept_encoding:
        return configured
    return Compression.NONE
